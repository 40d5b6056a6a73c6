"""Browser dashboard pages. They only render what the JSON API returns."""

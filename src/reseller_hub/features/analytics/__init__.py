"""Sales analytics for a reseller's storefront.

Only completed orders count. The report covers a trailing window (30 days by
default) and contains a sparse daily series, the best selling products by
revenue and the growth of the window against the one right before it."""

"""Order records. Orders are written by checkout elsewhere and only read here."""

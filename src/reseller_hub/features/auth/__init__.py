"""Token issuance and the reseller session guard."""

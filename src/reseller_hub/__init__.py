"""Reseller Hub: storefront analytics and settings API for resellers."""

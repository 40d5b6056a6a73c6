"""Reseller store configuration.

A reseller owns exactly one store. Its settings are a flat JSON map holding
the markup bounds alongside order, payment and notification preferences;
the settings endpoint merges partial updates into that map after checking
the requested default markup against the persisted bounds."""

"""Plugin configuration storage and access."""

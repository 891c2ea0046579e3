"""Background preview generation."""

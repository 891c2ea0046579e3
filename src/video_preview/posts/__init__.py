"""Message post interception."""

"""Video eligibility rules and metadata routes."""

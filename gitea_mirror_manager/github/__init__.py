"""GitHub (source) client."""

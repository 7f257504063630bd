"""HTTP API endpoint modules."""

"""HTTP API for chatdo."""

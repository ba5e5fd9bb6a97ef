"""External integrations for chatdo."""

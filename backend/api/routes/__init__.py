"""Reference backend route modules."""

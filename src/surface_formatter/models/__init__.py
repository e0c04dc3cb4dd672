"""Configuration models for surface-formatter."""

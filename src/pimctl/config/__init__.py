"""Configuration models, loading, writing, settings and logging."""

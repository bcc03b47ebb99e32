"""Core domain: models, metric names and derivers."""

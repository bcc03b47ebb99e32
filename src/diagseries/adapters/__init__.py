"""Adapters around the core: storage and query frameworks."""

"""Encoders for derived series."""

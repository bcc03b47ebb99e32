"""Framework adapters exposing the store to dashboards."""

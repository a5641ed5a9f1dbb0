"""Application layer: screens, table state, notifications and use cases."""

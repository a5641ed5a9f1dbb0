"""Persistence adapters: SQLAlchemy models, repositories and unit of work."""

# personnel_records/__init__.py
"""Employee records, each owning exactly one personnel file, kept in SQLite."""

__version__ = "0.1.0"

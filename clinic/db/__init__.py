"""Database base classes, sessions and migrations."""

"""Utility modules for Searchable."""

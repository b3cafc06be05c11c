"""Database integration for Searchable: dialects, schema introspection and model mixins."""

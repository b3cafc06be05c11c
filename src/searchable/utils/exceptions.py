"""Custom exceptions for Searchable."""


class SearchableError(Exception):
    """Base exception for all Searchable errors."""

    pass


class SearchError(SearchableError):
    """Error during search operations."""

    pass


class ConfigurationError(SearchableError):
    """Error in configuration or settings."""

    pass

"""
Custom exceptions for PGen.
"""


class PGenException(Exception):
    """Base exception for PGen."""

    pass


class ConfigurationError(PGenException):
    """Generation rules or configuration file are invalid."""

    pass


class DictionaryError(ConfigurationError):
    """Word dictionary is missing a bucket or holds malformed data."""

    pass

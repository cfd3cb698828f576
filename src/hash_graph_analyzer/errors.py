"""Exceptions raised by the hash graph analyzer."""


class AnalyzerError(Exception):
    """Base class for analyzer errors."""


class InvalidConfiguration(AnalyzerError, ValueError):
    """Raised when a configuration value is rejected before any scanning starts."""


class DomainOverflow(AnalyzerError, OverflowError):
    """Raised when the domain 2**k is too large to iterate."""

"""Custom exceptions for the Sentry reporting component."""

class SentryComponentException(Exception):
    """Base exception for the Sentry reporting component."""
    pass

class ConfigurationException(SentryComponentException):
    """Exception raised for invalid component configuration."""
    pass

"""Exceptions raised by skillstream providers."""


class ProviderError(RuntimeError):
    """Base class for errors raised while talking to a content provider."""


class TransportError(ProviderError):
    """The network call failed, timed out, or returned a non-success status."""


class DecodeError(ProviderError, ValueError):
    """A response body was not valid JSON or did not have the expected shape."""


class LoadError(ProviderError):
    """No source could produce the details of a course."""

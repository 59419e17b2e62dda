"""Exceptions raised by the documentation porter."""


class PortError(Exception):
    """Base class for porter failures."""


class EmptyCorpusError(PortError):
    """Raised when either the IntelliSense or the Docs corpus is empty."""


class PortAbortedError(PortError):
    """Raised when the operator chooses to exit at an interactive prompt."""

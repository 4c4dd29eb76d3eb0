"""
Exception classes for the relay.

Steady-state failures (bad frames, offline recipients, broken sockets) are
contained where they happen and never surface as these exceptions. Only
startup problems are allowed to stop the process.
"""


class RelayError(Exception):
    """Base class for relay errors."""

    pass


class StartupValidationError(RelayError):
    """
    Configuration is unusable.

    Raised before the server starts listening, e.g. when secured mode is
    requested but the certificate or key file cannot be read.
    """

    pass

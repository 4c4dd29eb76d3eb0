"""Real-time message relay over WebSockets."""

__version__ = "1.0.0"

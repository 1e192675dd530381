"""Price oracle account layouts, error codes and Q64.64 price math."""

__version__ = "0.1.0"
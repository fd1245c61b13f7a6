"""svcctl — start or stop an OS service and wait for it to settle."""

__version__ = "0.1.0"

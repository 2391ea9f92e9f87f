"""hostspec — validate live server state against a declared spec."""

__version__ = "0.1.0"

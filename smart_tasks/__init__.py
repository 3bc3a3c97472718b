"""Smart Tasks — semantic task search backed by a managed backend."""

__version__ = "0.1.0"

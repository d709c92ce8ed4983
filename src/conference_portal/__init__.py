"""Conference Portal: client for the conference management REST API."""

__version__ = "0.1.0"

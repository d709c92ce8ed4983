"""HTTP client for the conference management REST API."""

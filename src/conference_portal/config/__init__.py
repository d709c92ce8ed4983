"""Configuration and shared constants."""

"""Utility helpers for logging and file handling."""

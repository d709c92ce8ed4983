"""Core models and client-side rules for the conference portal."""

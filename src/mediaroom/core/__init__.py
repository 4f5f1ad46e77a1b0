"""Configuration, errors and token helpers."""

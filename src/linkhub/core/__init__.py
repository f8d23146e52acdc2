# src/linkhub/core/__init__.py
"""Core configuration, error types and logging setup."""

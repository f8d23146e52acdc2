# src/linkhub/utils/__init__.py
"""Small shared helpers."""

# src/linkhub/__init__.py
"""Link-aggregation and discussion backend."""

__version__ = "0.1.0"

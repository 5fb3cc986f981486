"""
Database layer - MongoDB connection cache and model registry.
"""

from .connection import get_connection, get_database, close_connection
from .registry import registry, ensure_indexes

__all__ = ['get_connection', 'get_database', 'close_connection', 'registry', 'ensure_indexes']

"""
Flask API for Catalog Search.
"""
from .app import create_app, prepare_index

__all__ = ["create_app", "prepare_index"]

"""Shared utilities for the backend."""
from utils.case import dict_keys_to_camel, to_camel_key
from utils.logging import configure_logging

__all__ = [
    "to_camel_key",
    "dict_keys_to_camel",
    "configure_logging",
]

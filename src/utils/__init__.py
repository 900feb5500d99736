"""Shared utilities for the git source extractor."""

from utils.env_utils import env_bool, env_int, env_path, env_value
from utils.registry_protocol import MutableRegistry

__all__ = [
    "MutableRegistry",
    "env_bool",
    "env_int",
    "env_path",
    "env_value",
]

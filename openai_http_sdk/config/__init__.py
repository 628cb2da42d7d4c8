"""Configuration module for the OpenAI HTTP SDK."""

from .paths import APIPaths, with_path
from .settings import Configuration

# Import all constants
from .constants import *

__all__ = [
    "APIPaths",
    "Configuration",
    "with_path",
]

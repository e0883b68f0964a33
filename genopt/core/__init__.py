"""
🔧 genopt Core Module
Configuration, logging, errors and randomness shared by the engine
"""

from .config import Settings, get_settings
from .logger import get_logger
from .exceptions import GenOptError, InvalidDomain, InvalidWeights, OutOfRange, InvalidConfiguration
from .random_source import RandomSource, NumpyRandomSource, default_random_source

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "GenOptError",
    "InvalidDomain",
    "InvalidWeights",
    "OutOfRange",
    "InvalidConfiguration",
    "RandomSource",
    "NumpyRandomSource",
    "default_random_source",
]

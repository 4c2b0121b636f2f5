"""Exception hierarchy for dynamic-ati."""

from .base import DynamicATIError
from .config import ConfigurationError, InvalidConfigError
from .engine import AlreadyCheckedOutError, EngineError, UnknownTagError

__all__ = [
    "DynamicATIError",
    "EngineError",
    "UnknownTagError",
    "AlreadyCheckedOutError",
    "ConfigurationError",
    "InvalidConfigError",
]

"""
dynamic-ati - Dynamic Abstract Type Inference

Observes which runtime values are bound to which variables and which values
interact while a program runs, and infers for each program location which
variables share an abstract type: two variables do if the values bound to
them have, directly or transitively, interacted in some observed execution.
"""

__version__ = "0.1.0"

from .config import EngineConfig, load_config
from .directory import SiteDirectory
from .engine import InferenceEngine, ReportEntry
from .index import ValueInteractionIndex
from .site import AnalysisSite
from .tags import Tag, TagFactory

__all__ = [
    "InferenceEngine",  # Main entry point
    "ReportEntry",
    "ValueInteractionIndex",
    "AnalysisSite",
    "SiteDirectory",
    "Tag",
    "TagFactory",
    "EngineConfig",
    "load_config",
]

"""Processing stages and registry for entry-file transformation."""

from .builtins import JsonDocumentStage, NonEmptyContentStage
from .registry import StageRegistry, create_default_registry

__all__ = [
    "JsonDocumentStage",
    "NonEmptyContentStage",
    "StageRegistry",
    "create_default_registry",
]

"""Data models for tfdoc."""

from .blocks import Attribute, Block, Module, ModuleLineage, SourceRange, TypedValue
from .document import METADATA_KEY, BlockMeta, ReferenceMeta
from .options import ParserOptions

__all__ = [
    "Attribute",
    "Block",
    "Module",
    "ModuleLineage",
    "SourceRange",
    "TypedValue",
    "METADATA_KEY",
    "BlockMeta",
    "ReferenceMeta",
    "ParserOptions"
]

"""Block tree importers for various parser outputs."""

from .base import BaseImporter
from .mock import MockImporter
from .tree_file import TreeFileImporter

__all__ = ["BaseImporter", "MockImporter", "TreeFileImporter"]

"""
tfdoc: Terraform block tree to JSON document converter.

Turns the evaluated blocks of a Terraform configuration into documents
annotated with source, path and reference metadata for policy tools.
"""

__version__ = "0.1.0"
__author__ = "tfdoc Project"

# Import main components
from .converter import TerraformConverter
from .errors import ModulePrefixConflictError, TfDocError, TreeLoadError
from .importers import BaseImporter, MockImporter, TreeFileImporter
from .models import Block, Module, ModuleLineage, ParserOptions, TypedValue

__all__ = [
    "TerraformConverter",
    "ModulePrefixConflictError",
    "TfDocError",
    "TreeLoadError",
    "BaseImporter",
    "MockImporter",
    "TreeFileImporter",
    "Block",
    "Module",
    "ModuleLineage",
    "ParserOptions",
    "TypedValue"
]

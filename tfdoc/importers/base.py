"""
Base importer interface for tfdoc.

This module defines the abstract interface that all block tree importers must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Module, ModuleLineage, ParserOptions


class BaseImporter(ABC):
    """
    Abstract base class for all block tree importers.

    Each importer obtains the evaluated modules of a configuration from some
    parser output and converts them into the Module/Block models.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """
        Initialize the importer.

        Args:
            options: Parser options, handed on to the parser that produced the tree
        """
        self.options = options or ParserOptions()

    @abstractmethod
    def get_modules(self) -> List[Module]:
        """
        Retrieve all evaluated modules.

        Returns:
            List of Module objects, root module first
        """
        pass

    @abstractmethod
    def get_lineage(self) -> ModuleLineage:
        """
        Retrieve the links from child module blocks to their module blocks.

        Returns:
            The ModuleLineage of the modules returned by get_modules()
        """
        pass

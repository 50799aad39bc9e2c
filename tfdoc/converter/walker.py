"""
Tree walker for tfdoc.

Visits every module of an evaluated configuration and files the document of
each supported top-level block under its collection key.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models import Block, Module, ModuleLineage
from .builder import BlockBuilder
from .paths import block_path, module_path
from .references import ReferenceIndex


SUPPORTED_BLOCK_TYPES = (
    "data",
    "locals",
    "output",
    "provider",
    "terraform",
    "variable",
    "module",
    "moved",
    "resource",
)

# Blocks of these types are filed under their type label instead of their type.
LABELLED_BLOCK_TYPES = ("data", "resource")


class TerraformConverter:
    """
    Converts a set of evaluated modules into one nested document.

    A converter performs a single pass: its reference index and output are
    built by visit_json() and discarded with the instance.
    """

    def __init__(
        self,
        modules: List[Module],
        lineage: Optional[ModuleLineage] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the converter.

        Args:
            modules: Evaluated modules, root module first
            lineage: Links between child module blocks and their module blocks
            logger: Diagnostics sink for this conversion
        """
        self.modules = modules
        self.lineage = lineage or ModuleLineage()
        self.logger = logger or logging.getLogger(__name__)
        self.index = ReferenceIndex(logger=self.logger)
        self.builder = BlockBuilder(self.index, logger=self.logger)

    def visit_json(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Convert every module.

        Returns:
            Mapping from collection key to the documents filed under it

        Raises:
            ModulePrefixConflictError: if a module has no consistent path
        """
        output: Dict[str, List[Dict[str, Any]]] = {}
        for module in self.modules:
            self.visit_module(module, output)
        self.logger.info(f"Converted {sum(len(docs) for docs in output.values())} blocks "
                         f"into {len(output)} collections")
        return output

    def visit_module(self, module: Module, output: Dict[str, List[Dict[str, Any]]]) -> None:
        path = module_path(module, self.lineage)
        self.logger.debug(f"Visiting module '{path or '<root>'}' with {len(module.blocks)} blocks")
        for block in module.blocks:
            self.visit_block(block, path, output)

    def visit_block(
        self,
        block: Block,
        parent_path: str,
        output: Dict[str, List[Dict[str, Any]]]
    ) -> None:
        """Register a block, then convert it if its type is supported."""
        self.index.register(block)

        if block.type not in SUPPORTED_BLOCK_TYPES:
            self.logger.warning(f"unknown block type: {block.type}")
            return

        if block.type in LABELLED_BLOCK_TYPES:
            key = block.type_label
            block_type = block.type
        else:
            key = block.type
            block_type = None

        document = self.builder.build(
            block,
            path=block_path(block, parent_path),
            block_type=block_type
        )
        output.setdefault(key, []).append(document)

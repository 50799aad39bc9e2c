"""
Block to document conversion for tfdoc.

Builds the JSON-ready dict for a block: its attributes, its (deduplicated)
children grouped by type, its identifier and its metadata.
"""

import logging
from typing import Any, Dict, Optional

from ..errors import VarTypeError
from ..models import METADATA_KEY, Block, BlockMeta
from .children import BlockCollector, child_blocks
from .references import ReferenceIndex
from .values import attribute_value
from .vartypes import decode_var_type


class BlockBuilder:
    """
    Converts blocks into document nodes.

    Reference metadata is resolved against the shared ReferenceIndex, so
    blocks referenced by this one must already be registered there.
    """

    def __init__(self, index: ReferenceIndex, logger: Optional[logging.Logger] = None):
        self.index = index
        self.logger = logger or logging.getLogger(__name__)

    def build(
        self,
        block: Block,
        path: Optional[str] = None,
        block_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Convert a block and its children to a dict.

        Args:
            block: The block to convert
            path: Full path of the block, recorded for top-level documents
            block_type: Block type to record when the document is filed under its label

        Returns:
            The document node, metadata under METADATA_KEY
        """
        document: Dict[str, Any] = {}

        collector = BlockCollector()
        for child in child_blocks(block):
            collector.add(child.type, self.build(child))
        document.update(collector.finalize())

        references: Dict[str, None] = {}
        for attribute in block.attributes:
            if block.type == "variable" and attribute.name == "type":
                document[attribute.name] = self._variable_type(block, attribute)
            else:
                document[attribute.name] = attribute_value(attribute)

            for reference in attribute.references:
                references.setdefault(reference, None)

        if block.id:
            document["id"] = block.id

        meta = BlockMeta(
            path=path,
            type=block_type,
            label=block.type_label or None,
            filename=block.range.filename,
            line_start=block.range.start_line,
            line_end=block.range.end_line,
            references=self.index.describe(references) or None
        )
        document[METADATA_KEY] = meta.to_dict()
        return document

    def _variable_type(self, block: Block, attribute) -> str:
        try:
            return decode_var_type(attribute)
        except VarTypeError as e:
            self.logger.warning(f"Could not decode type of {block.reference}: {e}")
            return attribute.raw

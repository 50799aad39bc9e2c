"""
Reference index for tfdoc.

Maps reference strings (e.g. "aws_s3_bucket.main") to the blocks they denote
so that a block's metadata can describe the blocks its attributes refer to.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import Block, ReferenceMeta


class ReferenceIndex:
    """
    Append-only index of visited blocks, keyed by reference string.

    Blocks must be registered when they are visited: a reference only
    resolves to a block that was registered before the lookup.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._blocks: Dict[str, Block] = {}
        self.logger = logger or logging.getLogger(__name__)

    def register(self, block: Block) -> None:
        reference = block.reference
        if reference in self._blocks and self._blocks[reference] is not block:
            self.logger.debug(f"Reference {reference} registered again, keeping the latest block")
        self._blocks[reference] = block

    def get(self, reference: str) -> Optional[Block]:
        return self._blocks.get(reference)

    def __contains__(self, reference: str) -> bool:
        return reference in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def describe(self, references: Iterable[str]) -> List[ReferenceMeta]:
        """
        Build descriptors for every reference that resolves in the index.

        Args:
            references: Reference strings collected from a block's attributes

        Returns:
            One ReferenceMeta per resolved reference, in input order
        """
        described = []
        for reference in references:
            block = self._blocks.get(reference)
            if block is None:
                continue
            described.append(ReferenceMeta(
                id=block.id,
                label=block.type_label,
                name=block.name_label
            ))
        return described

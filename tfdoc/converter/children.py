"""
Child block reconciliation for tfdoc.

The evaluator enumerates a block's children in source order, but `dynamic`
blocks show up twice: once as the template itself and again as the blocks
it expanded into, whose source ranges overlap the template. This module
recovers the logical children and groups them by type.
"""

import logging
from typing import Any, Dict, List

from ..models import Block


logger = logging.getLogger(__name__)

DYNAMIC = "dynamic"


def for_each_count(block: Block) -> int:
    """
    Number of instances a dynamic block expands into.

    A null, unknown or missing for_each expands into nothing, as does one
    whose value is not a collection.
    """
    attribute = block.get_attribute("for_each")
    if attribute is None:
        return 0
    value = attribute.value
    if value.is_null or not value.is_known:
        return 0
    try:
        return value.length()
    except TypeError:
        logger.warning(f"for_each of {block.reference} is a {value.type}, not a collection")
        return 0


def child_blocks(block: Block) -> List[Block]:
    """
    Return the logical children of a block.

    Dynamic templates are dropped and their for_each counts summed. A block
    starting at or after the furthest end line seen so far is a new child.
    A block starting inside an already covered range is taken to be an
    expanded instance and kept while the expected instance count stays
    above zero; surplus copies are dropped.

    Args:
        block: The parent block

    Returns:
        The children to convert, in source order
    """
    expected = 0
    max_end = 0
    children = []

    for child in block.children:
        if child.type == DYNAMIC:
            expected += for_each_count(child)
            continue

        if child.range.start_line >= max_end:
            max_end = child.range.end_line
            children.append(child)
            continue

        expected -= 1
        if expected > 0:
            children.append(child)

    return children


class BlockCollector:
    """
    Groups converted children by key.

    On finalize, a key holding a single item maps to that item and a key
    holding several maps to the ordered list. This only reflects how many
    items were rendered, not whether the schema allows more than one.
    """

    def __init__(self):
        self._items: Dict[str, List[Any]] = {}

    def add(self, key: str, value: Any) -> None:
        self._items.setdefault(key, []).append(value)

    def finalize(self) -> Dict[str, Any]:
        results = {}
        for key, items in self._items.items():
            if len(items) == 1:
                results[key] = items[0]
            else:
                results[key] = list(items)
        return results

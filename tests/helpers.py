"""Block building helpers shared by the tests."""

from typing import Any, List, Optional

from tfdoc.models import Attribute, Block, SourceRange, TypedValue


def attr(name: str, value: Any = None, raw: Optional[str] = None, refs: Optional[List[str]] = None) -> Attribute:
    """Attribute whose value is built from a plain Python value."""
    return Attribute(
        name=name,
        value=TypedValue.of(value),
        raw=raw if raw is not None else str(value),
        references=refs or []
    )


def make_block(block_type: str, labels: Optional[List[str]] = None, start: int = 1, end: int = 1,
               filename: str = "main.tf", **kwargs: Any) -> Block:
    return Block(
        type=block_type,
        labels=labels or [],
        range=SourceRange(filename=filename, start_line=start, end_line=end),
        **kwargs
    )


def dynamic_block(label: str, for_each: Any, start: int, end: int) -> Block:
    return make_block("dynamic", [label], start, end, attributes=[attr("for_each", for_each)])

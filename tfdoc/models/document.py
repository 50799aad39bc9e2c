"""
Document metadata models for tfdoc.

Each converted block becomes a plain dict; its source and reference metadata
is described by these models and dumped under the METADATA_KEY entry.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


METADATA_KEY = "__tfmeta"


class ReferenceMeta(BaseModel):
    """
    Compact descriptor of a block referenced from another block's attributes.
    """

    id: str = Field(..., description="Identifier of the referenced block")

    label: str = Field(..., description="Type label of the referenced block")

    name: str = Field(..., description="Name label of the referenced block")


class BlockMeta(BaseModel):
    """
    Metadata attached to every converted block.
    """

    path: Optional[str] = Field(
        default=None,
        description="Hierarchical location, e.g. module.infra.aws_s3_bucket.main (top-level documents only)"
    )

    type: Optional[str] = Field(
        default=None,
        description="Underlying block type when the collection key is a type label"
    )

    label: Optional[str] = Field(default=None, description="Type label of the block")

    filename: str

    line_start: int

    line_end: int

    references: Optional[List[ReferenceMeta]] = Field(
        default=None,
        description="Resolved references to previously visited blocks"
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

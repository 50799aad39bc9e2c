"""
Parser options for tfdoc.

These settings belong to the parser/evaluator that produces the block tree.
The converter does not interpret them; importers hand them on.
"""

from typing import List

from pydantic import BaseModel, Field


class ParserOptions(BaseModel):
    """
    Options passed through to the HCL parser.
    """

    debug: bool = Field(
        default=False,
        description="Enable verbose parser diagnostics"
    )

    stop_on_hcl_error: bool = Field(
        default=False,
        description="Abort when the parser reports an HCL error"
    )

    allow_downloads: bool = Field(
        default=False,
        description="Allow remote module sources to be downloaded"
    )

    tfvars_paths: List[str] = Field(
        default_factory=list,
        description="Variable definition files used for interpolation"
    )

"""Block tree to document conversion."""

from .builder import BlockBuilder
from .children import BlockCollector, child_blocks, for_each_count
from .paths import block_path, module_name, module_path
from .references import ReferenceIndex
from .values import attribute_value, convert_value
from .vartypes import decode_var_type, friendly_type_name
from .walker import TerraformConverter

__all__ = [
    "BlockBuilder",
    "BlockCollector",
    "child_blocks",
    "for_each_count",
    "block_path",
    "module_name",
    "module_path",
    "ReferenceIndex",
    "attribute_value",
    "convert_value",
    "decode_var_type",
    "friendly_type_name",
    "TerraformConverter"
]

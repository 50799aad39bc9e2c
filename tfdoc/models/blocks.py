"""
Block tree models for tfdoc.

This module defines the input data structures that importers must build from
the output of an HCL parser/evaluator: modules, blocks, attributes and the
typed values those attributes evaluate to.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


# Value type tags understood by the value converter. Any other tag is opaque.
NULL = "null"
UNKNOWN = "unknown"
STRING = "string"
NUMBER = "number"
BOOL = "bool"
LIST = "list"
TUPLE = "tuple"
SET = "set"
OBJECT = "object"
MAP = "map"

COLLECTION_TYPES = (LIST, TUPLE, SET)
MAPPING_TYPES = (OBJECT, MAP)


class TypedValue(BaseModel):
    """
    An evaluated configuration value together with its type tag.

    Collections nest further TypedValues: a list/tuple/set carries a list of
    them, an object/map carries a dict of them. Numbers are kept as text so
    that no precision is lost before conversion.
    """

    type: str = Field(
        ...,
        description="Type tag, e.g. 'string', 'number', 'list', 'object', 'unknown'"
    )

    value: Any = Field(
        default=None,
        description="Payload for the type tag; nested TypedValues for collections"
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = data.get("type")
        payload = data.get("value")
        if kind in COLLECTION_TYPES and payload is not None:
            data = {**data, "value": [cls._as_typed(item) for item in payload]}
        elif kind in MAPPING_TYPES and payload is not None:
            data = {**data, "value": {key: cls._as_typed(item) for key, item in payload.items()}}
        elif kind == NUMBER and payload is not None and not isinstance(payload, str):
            data = {**data, "value": str(payload)}
        return data

    @classmethod
    def _as_typed(cls, item: Any) -> "TypedValue":
        if isinstance(item, TypedValue):
            return item
        return cls.model_validate(item)

    @property
    def is_null(self) -> bool:
        return self.type == NULL

    @property
    def is_known(self) -> bool:
        return self.type != UNKNOWN

    def as_decimal(self) -> Decimal:
        """Return a number payload at full precision."""
        return Decimal(self.value)

    def length(self) -> int:
        """Number of elements (collections) or members (objects and maps)."""
        if self.type in COLLECTION_TYPES or self.type in MAPPING_TYPES:
            return len(self.value or ())
        raise TypeError(f"value of type '{self.type}' has no length")

    @classmethod
    def null(cls) -> "TypedValue":
        return cls(type=NULL)

    @classmethod
    def unknown(cls) -> "TypedValue":
        return cls(type=UNKNOWN)

    @classmethod
    def of(cls, native: Any) -> "TypedValue":
        """
        Build a TypedValue from a plain Python value.

        Lists become tuples (HCL literals are tuples until a type constraint
        says otherwise) and dicts become objects.

        Args:
            native: None, str, bool, int, float, Decimal, list or dict

        Returns:
            The equivalent TypedValue
        """
        if isinstance(native, TypedValue):
            return native
        if native is None:
            return cls(type=NULL)
        if isinstance(native, bool):
            return cls(type=BOOL, value=native)
        if isinstance(native, (int, float, Decimal)):
            return cls(type=NUMBER, value=str(native))
        if isinstance(native, str):
            return cls(type=STRING, value=native)
        if isinstance(native, (list, tuple)):
            return cls(type=TUPLE, value=[cls.of(item) for item in native])
        if isinstance(native, dict):
            return cls(type=OBJECT, value={str(k): cls.of(v) for k, v in native.items()})
        raise TypeError(f"Cannot build a typed value from {type(native).__name__}")


class SourceRange(BaseModel):
    """
    Location of a block in its source file.
    """

    filename: str = Field(
        ...,
        description="Path of the file relative to the configuration root"
    )

    start_line: int = Field(..., ge=0)

    end_line: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "SourceRange":
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line {self.end_line} is before start_line {self.start_line} in {self.filename}"
            )
        return self


class Attribute(BaseModel):
    """
    One `name = expression` pair of a block.
    """

    name: str

    value: TypedValue = Field(
        default_factory=TypedValue.unknown,
        description="The evaluated value of the expression"
    )

    raw: str = Field(
        default="",
        description="The expression as written, used when the value cannot be converted"
    )

    references: List[str] = Field(
        default_factory=list,
        description="Reference strings of other blocks used in the expression"
    )


class Block(BaseModel):
    """
    A configuration block (resource, variable, module, dynamic, ...).

    Children are kept exactly as the evaluator enumerates them, which for
    `dynamic` blocks means the template and its expanded instances overlap.
    """

    type: str = Field(..., description="Block type, e.g. 'resource', 'variable', 'dynamic'")

    labels: List[str] = Field(default_factory=list)

    attributes: List[Attribute] = Field(default_factory=list)

    children: List["Block"] = Field(default_factory=list)

    id: str = Field(default="", description="Identifier assigned by the evaluator")

    index: Optional[Union[int, str]] = Field(
        default=None,
        description="count index or for_each key of an expanded block"
    )

    range: SourceRange

    explicit_reference: Optional[str] = Field(
        default=None,
        alias="reference",
        description="Reference string supplied by the evaluator, overrides the derived one"
    )

    model_config = {"populate_by_name": True}

    @property
    def type_label(self) -> str:
        return self.labels[0] if self.labels else ""

    @property
    def name_label(self) -> str:
        return self.labels[1] if len(self.labels) > 1 else ""

    @property
    def index_suffix(self) -> str:
        if self.index is None:
            return ""
        if isinstance(self.index, int):
            return f"[{self.index}]"
        return f'["{self.index}"]'

    @property
    def reference(self) -> str:
        """
        The address other blocks use to refer to this one.

        Examples: aws_s3_bucket.main, data.aws_iam_policy.admin, var.region,
        module.infra, aws_instance.web[0]
        """
        if self.explicit_reference:
            return self.explicit_reference
        if self.type == "resource":
            parts = [self.type_label, self.name_label]
        elif self.type == "variable":
            parts = ["var", *self.labels]
        elif self.type in ("locals", "terraform", "moved"):
            parts = [self.type]
        else:
            parts = [self.type, *self.labels]
        return ".".join(part for part in parts if part) + self.index_suffix

    @property
    def address(self) -> str:
        """Position-qualified name, unique within the enclosing module."""
        return self.reference

    def get_attribute(self, name: str) -> Optional[Attribute]:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


class Module(BaseModel):
    """
    One evaluated module: the root module or an instance of a `module` block.
    """

    blocks: List[Block] = Field(default_factory=list)


class ModuleLineage:
    """
    Side table linking blocks to the `module` block that instantiated them.

    A block that lives in a child module maps to the `module "x" {}` block of
    the parent module. Root module blocks have no entry. Entries are keyed by
    object identity and only hold blocks already owned by the module tree.
    """

    def __init__(self):
        self._parents: Dict[int, Block] = {}
        self._owned: Dict[int, Block] = {}

    def register(self, block: Block, module_block: Block) -> None:
        if module_block.type != "module":
            raise ValueError(
                f"'{module_block.reference}' is a {module_block.type} block, not a module block"
            )
        self._owned[id(block)] = block
        self._parents[id(block)] = module_block

    def register_module(self, module: Module, module_block: Block) -> None:
        """Attach every root block of `module` to `module_block`."""
        for block in module.blocks:
            self.register(block, module_block)

    def module_block_of(self, block: Block) -> Optional[Block]:
        if self._owned.get(id(block)) is not block:
            return None
        return self._parents.get(id(block))

    def __len__(self) -> int:
        return len(self._parents)


Block.model_rebuild()

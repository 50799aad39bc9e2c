"""
Block tree file importer for tfdoc.

Reads the evaluated block tree that an external HCL parser wrote to disk as
JSON or YAML. The file holds a list of modules and, optionally, the
diagnostics the parser reported:

    diagnostics:
      - {severity: error, summary: "Unsupported argument", filename: main.tf, line: 3}
    modules:
      - blocks: [...]
      - parent: {module: 0, block: module.infra}
        blocks: [...]

A module's `parent` names the `module` block, in another module, that
instantiated it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..errors import ParseDiagnosticsError, TreeLoadError
from ..models import Block, Module, ModuleLineage, ParserOptions
from .base import BaseImporter


YAML_SUFFIXES = (".yaml", ".yml")


class Diagnostic(BaseModel):
    """A problem reported by the parser while producing the tree."""

    severity: str = Field(default="error")

    summary: str

    filename: Optional[str] = None

    line: Optional[int] = None

    def __str__(self) -> str:
        location = ""
        if self.filename:
            location = f"{self.filename}:{self.line}: " if self.line is not None else f"{self.filename}: "
        return f"{location}{self.summary}"


class ParentRef(BaseModel):
    """Position of the module block that instantiated a module."""

    module: int = Field(..., ge=0)

    block: str


class TreeFileImporter(BaseImporter):
    """
    Importer for block tree files written by an external parser.
    """

    def __init__(
        self,
        tree_path: str,
        options: Optional[ParserOptions] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the tree file importer.

        Args:
            tree_path: Path to the JSON or YAML block tree
            options: Parser options; stop_on_hcl_error applies here
            logger: Diagnostics sink for this import
        """
        super().__init__(options)
        self.tree_path = Path(tree_path)
        self._modules: Optional[List[Module]] = None
        self._lineage = ModuleLineage()

        self.logger = logger or logging.getLogger(__name__)

        self.logger.info(f"Initialized tree file importer for: {self.tree_path}")
        self.logger.debug(f"Parser options: {self.options.model_dump()}")

    def get_modules(self) -> List[Module]:
        if self._modules is None:
            self._modules = self._load()
        return self._modules

    def get_lineage(self) -> ModuleLineage:
        self.get_modules()
        return self._lineage

    def _load(self) -> List[Module]:
        data = self._read_tree()

        diagnostics = self._validate_diagnostics(data.get("diagnostics") or [])
        self._check_diagnostics(diagnostics)

        raw_modules = data.get("modules")
        if not isinstance(raw_modules, list):
            raise TreeLoadError(f"{self.tree_path}: expected a 'modules' list")

        modules = []
        parents: Dict[int, ParentRef] = {}
        try:
            for position, raw in enumerate(raw_modules):
                if not isinstance(raw, dict):
                    raise TreeLoadError(f"{self.tree_path}: module {position} is not a mapping")
                if raw.get("parent") is not None:
                    parents[position] = ParentRef.model_validate(raw["parent"])
                modules.append(Module.model_validate({"blocks": raw.get("blocks") or []}))
        except ValidationError as e:
            raise TreeLoadError(f"{self.tree_path}: invalid block tree: {e}") from e

        self._check_parent_chains(parents)
        for position, parent in parents.items():
            module_block = self._find_module_block(modules, parent)
            self._lineage.register_module(modules[position], module_block)

        block_count = sum(len(module.blocks) for module in modules)
        self.logger.info(f"Loaded {len(modules)} modules with {block_count} root blocks from {self.tree_path}")
        return modules

    def _read_tree(self) -> Dict[str, Any]:
        if not self.tree_path.is_file():
            raise TreeLoadError(f"Block tree file not found: {self.tree_path}")

        try:
            with open(self.tree_path, 'r', encoding='utf-8') as f:
                if self.tree_path.suffix.lower() in YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise TreeLoadError(f"Failed to read block tree {self.tree_path}: {e}") from e

        if not isinstance(data, dict):
            raise TreeLoadError(f"{self.tree_path}: expected a mapping at the top level")
        return data

    def _validate_diagnostics(self, raw: List[Any]) -> List[Diagnostic]:
        try:
            return [Diagnostic.model_validate(item) for item in raw]
        except ValidationError as e:
            raise TreeLoadError(f"{self.tree_path}: invalid diagnostics: {e}") from e

    def _check_diagnostics(self, diagnostics: List[Diagnostic]) -> None:
        errors = [str(d) for d in diagnostics if d.severity.lower() == "error"]
        for diagnostic in diagnostics:
            self.logger.warning(f"Parser {diagnostic.severity}: {diagnostic}")
        if errors and self.options.stop_on_hcl_error:
            raise ParseDiagnosticsError(errors)

    def _check_parent_chains(self, parents: Dict[int, ParentRef]) -> None:
        """Reject modules that are, directly or through other modules, their own parent."""
        for start in parents:
            seen = [start]
            position = parents[start].module
            while position in parents:
                if position in seen:
                    chain = " -> ".join(str(p) for p in seen + [position])
                    raise TreeLoadError(f"{self.tree_path}: module parent cycle: {chain}")
                seen.append(position)
                position = parents[position].module

    def _find_module_block(self, modules: List[Module], parent: ParentRef) -> Block:
        if parent.module >= len(modules):
            raise TreeLoadError(f"{self.tree_path}: parent module {parent.module} does not exist")
        for block in modules[parent.module].blocks:
            if block.type == "module" and block.reference == parent.block:
                return block
        raise TreeLoadError(
            f"{self.tree_path}: module block '{parent.block}' not found in module {parent.module}"
        )

"""
Exceptions raised by tfdoc.
"""

from typing import Iterable, List


class TfDocError(Exception):
    """Base class for all tfdoc errors."""


class ModulePrefixConflictError(TfDocError):
    """
    Root blocks of one module disagree on the module that encloses them.

    The conversion cannot build a coherent path scheme and is aborted.
    """

    def __init__(self, names: Iterable[str]):
        self.names: List[str] = sorted(names)
        super().__init__(f"Conflicting module prefixes: {', '.join(self.names)}")


class TreeLoadError(TfDocError):
    """A block tree file could not be read or validated."""


class ParseDiagnosticsError(TreeLoadError):
    """The parser recorded errors and stop-on-error is enabled."""

    def __init__(self, diagnostics: List[str]):
        self.diagnostics = diagnostics
        super().__init__(f"Parser reported {len(diagnostics)} error(s): {'; '.join(diagnostics)}")


class VarTypeError(TfDocError):
    """A variable type constraint could not be decoded."""

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic records for the driver.

The core raises exceptions; only the driver converts them into Diagnostics,
which render either as `file:line:col: error: message` or as JSON objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .errors import GoliteError
from .span import Span


@dataclass
class Diagnostic:
	"""A single error reported to the user."""

	message: str
	phase: Optional[str] = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@classmethod
	def from_error(cls, err: GoliteError, file: Optional[str] = None) -> "Diagnostic":
		return cls(message=err.message, phase=err.phase, span=Span.from_loc(err.loc, file=file))

	def render(self) -> str:
		text = f"{self.span.render()}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text

	def to_json(self) -> Dict[str, object]:
		return {
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
		}


__all__ = ["Diagnostic"]

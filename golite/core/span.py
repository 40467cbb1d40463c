# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span attached to errors and diagnostics.

A Span carries best-effort file/line/column info and keeps whatever location
object the front end handed over in `raw`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Source span (file/line/column when known, plus the raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Build a Span from a parser location object.

		A Span is returned unchanged; `None` yields the unknown Span().
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		return cls(
			file=getattr(loc, "file", None) or file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			raw=loc,
		)

	def render(self) -> str:
		"""`file:line:column`, with `?` for unknown parts."""
		file = self.file or "<unknown>"
		line = "?" if self.line is None else str(self.line)
		column = "?" if self.column is None else str(self.column)
		return f"{file}:{line}:{column}"


__all__ = ["Span"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared error types, source spans and diagnostics."""

from .diagnostics import Diagnostic
from .errors import (
	EvalError,
	GoPanic,
	GoliteError,
	LoweringError,
	ParseError,
	UnsupportedConstructError,
)
from .span import Span

__all__ = [
	"Diagnostic",
	"EvalError",
	"GoPanic",
	"GoliteError",
	"LoweringError",
	"ParseError",
	"Span",
	"UnsupportedConstructError",
]

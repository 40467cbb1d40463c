# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fatal error taxonomy.

Every failure in golite is unrecoverable for the run that raised it:

  ParseError                 front end could not read the source text
  LoweringError              source construct cannot be lowered to IR
  UnsupportedConstructError  construct has no IR form at all ("not implemented")
  EvalError                  evaluation hit an invalid state
  GoPanic                    the program called `panic(v)`; carries `v`

Nothing inside the core catches these. The driver turns them into
diagnostics at the very top.
"""

from __future__ import annotations

from typing import Any, Optional


class GoliteError(Exception):
	"""Base class for fatal golite failures."""

	phase = "internal"

	def __init__(self, message: str, *, loc: Optional[Any] = None) -> None:
		super().__init__(message)
		self.message = message
		self.loc = loc


class ParseError(GoliteError):
	"""Syntax error reported by the Go front end."""

	phase = "parser"


class LoweringError(GoliteError):
	"""The lowering pass rejected a source construct."""

	phase = "lowering"


class UnsupportedConstructError(LoweringError, NotImplementedError):
	"""A statement, expression, operator or literal kind with no IR form."""


class EvalError(GoliteError, RuntimeError):
	"""The evaluator reached a state it cannot continue from."""

	phase = "eval"


class GoPanic(GoliteError):
	"""
	User-triggered abort from the `panic` builtin.

	`payload` is the evaluated runtime value passed to `panic`; `text` is its
	rendering, used as the message.
	"""

	phase = "panic"

	def __init__(self, payload: Any, text: str) -> None:
		super().__init__(f"panic: {text}")
		self.payload = payload
		self.text = text


__all__ = [
	"GoliteError",
	"ParseError",
	"LoweringError",
	"UnsupportedConstructError",
	"EvalError",
	"GoPanic",
]

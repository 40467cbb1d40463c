# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Basic literal parsing.

Turns the raw token text kept in `BasicLit.value` into the host value stored
in a LiteralExpr. Integers become plain Python ints so later equality and
comparison are value-based rather than width-based.
"""

from __future__ import annotations

from typing import Any, Optional

from golite.core.errors import LoweringError, UnsupportedConstructError
from golite.core.span import Span
from golite.parser import ast
from golite.parser.ast import LitKind


def parse_int(text: str, span: Optional[Span] = None) -> int:
	"""
	Parse a Go integer literal.

	Accepts decimal, hex (`0x`), binary (`0b`), octal (`0o` and the legacy
	leading-zero form `017`) and `_` digit separators.
	"""
	try:
		if len(text) > 1 and text[0] == "0" and text[1].isdigit():
			return int(text.replace("_", ""), 8)
		return int(text, 0)
	except ValueError:
		raise LoweringError(f"invalid integer literal {text}", loc=span) from None


def parse_string(text: str) -> str:
	"""
	Unquote a string literal.

	Raw (backquoted) strings are taken verbatim. Interpreted strings only
	have `\\n` unescaped; every other escape sequence is kept as written.
	"""
	body = text[1:-1]
	if text.startswith("`"):
		return body
	return body.replace("\\n", "\n")


def parse_literal(lit: ast.BasicLit, span: Optional[Span] = None) -> Any:
	if lit.kind is LitKind.INT:
		return parse_int(lit.value, span)
	if lit.kind is LitKind.STRING:
		return parse_string(lit.value)
	raise UnsupportedConstructError(f"{lit.kind.value} literal not implemented: {lit.value}", loc=span)


__all__ = ["parse_int", "parse_string", "parse_literal"]

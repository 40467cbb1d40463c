# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Zero-value synthesis for declared types.

`var x T` lowers to `x = <zero of T>`. Zero values are IR expressions, not
runtime values, so a struct zero is a StructLiteralExpr whose every field
holds its own zero, recursively.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

from golite.core.errors import LoweringError, UnsupportedConstructError
from golite.core.span import Span
from golite.parser import ast

from . import ir_nodes as ir
from .literals import parse_int

INT_TYPES: FrozenSet[str] = frozenset(
	{
		"int",
		"int8",
		"int16",
		"int32",
		"int64",
		"uint",
		"uint8",
		"uint16",
		"uint32",
		"uint64",
		"uintptr",
		"byte",
		"rune",
	}
)

StructDefs = Dict[str, ast.StructType]


def zero_value_expr(
	type_expr: ast.Expr,
	struct_defs: StructDefs,
	span: Optional[Span] = None,
	_visiting: FrozenSet[str] = frozenset(),
) -> ir.Expr:
	"""IR expression producing the zero value of `type_expr`."""
	if isinstance(type_expr, ast.Ident):
		name = type_expr.name
		if name in INT_TYPES:
			return ir.LiteralExpr(0)
		if name == "string":
			return ir.LiteralExpr("")
		if name == "bool":
			return ir.LiteralExpr(False)
		if name in struct_defs:
			fields, _ = struct_zero_fields(name, struct_defs, span, _visiting)
			return ir.StructLiteralExpr(type_name=name, initial_values=fields)
		raise LoweringError(f"Unexpected type identifier: {name}", loc=span)
	if isinstance(type_expr, (ast.StarExpr, ast.InterfaceType)):
		return ir.LiteralExpr(None)
	if isinstance(type_expr, ast.ArrayType):
		if type_expr.len is None:
			# A nil slice; len and append treat it as empty.
			return ir.LiteralExpr(None)
		elt = element_type_expr(type_expr.elt, span)
		length = array_length(type_expr.len, span)
		zero = zero_value_expr(type_expr.elt, struct_defs, span, _visiting)
		return ir.ArrayLiteralExpr(type=elt, vals=[zero] * length)
	raise UnsupportedConstructError(
		f"Zero value not implemented for {type(type_expr).__name__}", loc=span
	)


def struct_zero_fields(
	name: str,
	struct_defs: StructDefs,
	span: Optional[Span] = None,
	_visiting: FrozenSet[str] = frozenset(),
) -> Tuple[Dict[str, ir.Expr], List[str]]:
	"""
	Zero initializer for every field of struct `name`, plus the declared field
	order (struct literals match positional values against it).
	"""
	if name not in struct_defs:
		raise LoweringError(f"Unknown struct {name}", loc=span)
	if name in _visiting:
		raise LoweringError(f"invalid recursive type {name}", loc=span)
	visiting = _visiting | {name}
	fields: Dict[str, ir.Expr] = {}
	order: List[str] = []
	for field in struct_defs[name].fields:
		zero = zero_value_expr(field.type, struct_defs, span, visiting)
		for field_name in field.names:
			fields[field_name] = zero
			order.append(field_name)
	return fields, order


def element_type_expr(elt: ast.Expr, span: Optional[Span] = None) -> ir.Expr:
	"""Element type of a slice/array literal; only named types are allowed."""
	if isinstance(elt, ast.Ident):
		return ir.IdentExpr(elt.name)
	raise UnsupportedConstructError(
		f"Element type not implemented: {type(elt).__name__}", loc=span
	)


def array_length(length: ast.Expr, span: Optional[Span] = None) -> int:
	if isinstance(length, ast.BasicLit) and length.kind is ast.LitKind.INT:
		return parse_int(length.value, span)
	raise UnsupportedConstructError("Array length must be an integer literal", loc=span)


__all__ = [
	"INT_TYPES",
	"zero_value_expr",
	"struct_zero_fields",
	"element_type_expr",
	"array_length",
]

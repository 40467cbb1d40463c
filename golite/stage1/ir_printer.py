# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Deterministic text dump of the IR, used by `golite --dump-ir` and by tests
that pin lowering output.

Functions print sorted by name, then methods grouped by type. Host callables
in literals print as their Go name when they come from a standard native
package (`fmt.Println`) and as their Python qualified name otherwise (`add`
for operators).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from golite.runtime.native import STANDARD_PACKAGES

from . import ir_nodes as ir

_INDENT = "  "

_NATIVE_NAMES: Dict[int, str] = {
	id(func): f"{pkg.name}.{name}"
	for pkg in STANDARD_PACKAGES.values()
	for name, func in pkg.funcs.items()
}


def format_literal(val: Any) -> str:
	if val is None:
		return "nil"
	if isinstance(val, bool):
		return "true" if val else "false"
	if isinstance(val, str):
		return json.dumps(val, ensure_ascii=False)
	if callable(val):
		return _NATIVE_NAMES.get(id(val)) or getattr(val, "__qualname__", repr(val))
	return str(val)


def format_expr(expr: ir.Expr) -> str:
	if isinstance(expr, ir.IdentExpr):
		return expr.name
	if isinstance(expr, ir.LiteralExpr):
		return format_literal(expr.val)
	if isinstance(expr, ir.CallExpr):
		args = ", ".join(format_expr(a) for a in expr.args)
		return f"{format_expr(expr.func)}({args})"
	if isinstance(expr, ir.IndexExpr):
		return f"{format_expr(expr.e)}[{format_expr(expr.index)}]"
	if isinstance(expr, ir.FieldAccessExpr):
		return f"{format_expr(expr.e)}.{expr.name}"
	if isinstance(expr, ir.SliceLiteralExpr):
		vals = ", ".join(format_expr(v) for v in expr.vals)
		return f"[]{format_expr(expr.type)}{{{vals}}}"
	if isinstance(expr, ir.ArrayLiteralExpr):
		vals = ", ".join(format_expr(v) for v in expr.vals)
		return f"[{len(expr.vals)}]{format_expr(expr.type)}{{{vals}}}"
	if isinstance(expr, ir.StructLiteralExpr):
		fields = ", ".join(f"{k}: {format_expr(v)}" for k, v in expr.initial_values.items())
		return f"{expr.type_name}{{{fields}}}"
	return "<invalid expr>"


def format_stmt(stmt: ir.Stmt, depth: int = 0) -> str:
	"""Render one statement; compound statements span several lines."""
	pad = _INDENT * depth
	if isinstance(stmt, ir.ExprStmt):
		return pad + format_expr(stmt.e)
	if isinstance(stmt, ir.AssignStmt):
		lhs = ", ".join(format_expr(e) for e in stmt.lhs)
		rhs = ", ".join(format_expr(e) for e in stmt.rhs)
		return f"{pad}{lhs} = {rhs}"
	if isinstance(stmt, ir.EmptyStmt):
		return pad + "<empty>"
	if isinstance(stmt, ir.BreakStmt):
		return pad + "break"
	if isinstance(stmt, ir.ReturnStmt):
		if not stmt.results:
			return pad + "return"
		return pad + "return " + ", ".join(format_expr(e) for e in stmt.results)
	if isinstance(stmt, ir.BlockStmt):
		return "\n".join([pad + "{", *_format_body(stmt, depth + 1), pad + "}"])
	if isinstance(stmt, ir.IfStmt):
		lines = [f"{pad}if {_header_stmt(stmt.init)}{format_expr(stmt.cond)} {{"]
		lines.extend(_format_body(stmt.body, depth + 1))
		if isinstance(stmt.else_, ir.EmptyStmt):
			lines.append(pad + "}")
		else:
			lines.append(pad + "} else {")
			lines.extend(_format_body(stmt.else_, depth + 1))
			lines.append(pad + "}")
		return "\n".join(lines)
	if isinstance(stmt, ir.ForStmt):
		init = format_stmt(stmt.init).strip()
		post = format_stmt(stmt.post).strip()
		lines = [f"{pad}for {init}; {format_expr(stmt.cond)}; {post} {{"]
		lines.extend(_format_body(stmt.body, depth + 1))
		lines.append(pad + "}")
		return "\n".join(lines)
	return pad + "<invalid stmt>"


def _header_stmt(stmt: ir.Stmt) -> str:
	if isinstance(stmt, ir.EmptyStmt):
		return ""
	return format_stmt(stmt).strip() + "; "


def _format_body(stmt: ir.Stmt, depth: int) -> List[str]:
	# Blocks used as bodies are flattened into the enclosing braces.
	if isinstance(stmt, ir.BlockStmt):
		return [format_stmt(s, depth) for s in stmt.stmts]
	return [format_stmt(stmt, depth)]


def format_func(name: str, func: ir.FuncDecl) -> str:
	header = f"func {name}({', '.join(func.param_names)}) {{"
	return "\n".join([header, *_format_body(func.body, 1), "}"])


def format_method(type_name: str, name: str, method: ir.MethodDecl) -> str:
	star = "*" if method.is_pointer else ""
	params = ", ".join(method.func.param_names)
	header = f"func ({method.receiver_name} {star}{type_name}) {name}({params}) {{"
	return "\n".join([header, *_format_body(method.func.body, 1), "}"])


def format_package(package: ir.Package) -> str:
	parts = [format_func(name, package.funcs[name]) for name in sorted(package.funcs)]
	for type_name in sorted(package.types):
		methods = package.types[type_name].methods
		parts.extend(format_method(type_name, name, methods[name]) for name in sorted(methods))
	return "\n\n".join(parts) + "\n"


__all__ = ["format_literal", "format_expr", "format_stmt", "format_func", "format_method", "format_package"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST → IR lowering.

Pipeline placement:
  AST (golite/parser/ast.py) → lowering (this file) → IR (ir_nodes.py)

This pass removes everything the evaluator should not have to know about:

  - operators become calls on LiteralExprs wrapping runtime functions
    (golite/runtime/operators.py),
  - `var` declarations become assignments of zero values,
  - `pkg.Member` selectors on native packages are resolved to LiteralExprs,
  - struct literals are completed with zero values for omitted fields,
  - absent if/for parts are filled with EmptyStmt / a `true` literal.

Identifier classification relies on `CompileContext.active_vars`: the set of
names that are locals of the function being lowered (receiver, parameters,
named results, and anything assigned or declared so far). It is reset for
every function.

Any construct without an IR form raises UnsupportedConstructError; there is
no partial lowering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from golite.core.errors import LoweringError, UnsupportedConstructError
from golite.core.span import Span
from golite.parser import ast
from golite.runtime.native import NativePackage
from golite.runtime.operators import (
	ASSIGN_BINARY_OPERATORS,
	BINARY_OPERATORS,
	INC_DEC_OPERATORS,
	UNARY_OPERATORS,
)

from . import ir_nodes as ir
from .literals import parse_literal
from .zero_values import array_length, element_type_expr, struct_zero_fields, zero_value_expr

logger = logging.getLogger(__name__)

_PREDECLARED_CONSTANTS = {"true": True, "false": False, "nil": None}


@dataclass
class CompileContext:
	"""Registries threaded through one lowering run."""

	native_packages: Dict[str, NativePackage] = field(default_factory=dict)
	struct_defs: Dict[str, ast.StructType] = field(default_factory=dict)
	active_vars: Set[str] = field(default_factory=set)


def compile_package(ctx: CompileContext, files: Iterable[ast.File]) -> ir.Package:
	"""Lower the files of one Go package into an IR Package."""
	return SourceToIR(ctx).lower_package(list(files))


class SourceToIR:
	"""Per-run lowering state on top of a CompileContext."""

	def __init__(self, ctx: CompileContext) -> None:
		self.ctx = ctx
		self._filename: Optional[str] = None
		self._imports: Dict[str, str] = {}
		self._loop_depth = 0
		self._named_results: List[str] = []

	# --- package level ---

	def lower_package(self, files: List[ast.File]) -> ir.Package:
		# Struct definitions first: functions may use types declared later
		# or in another file.
		for file in files:
			self._enter_file(file)
			for decl in file.decls:
				if isinstance(decl, ast.GenDecl):
					self._collect_gen_decl(decl)

		funcs: Dict[str, ir.FuncDecl] = {}
		types: Dict[str, ir.TypeDecl] = {}
		for file in files:
			self._enter_file(file)
			for decl in file.decls:
				if not isinstance(decl, ast.FuncDecl):
					continue
				if decl.recv is None:
					if decl.name in funcs:
						raise LoweringError(f"{decl.name} redeclared in this block", loc=self._span(decl))
					funcs[decl.name] = self.lower_func(decl)
					logger.debug("lowered function %s", decl.name)
					continue
				type_name, method = self.lower_method(decl)
				methods = types.setdefault(type_name, ir.TypeDecl()).methods
				if decl.name in methods:
					raise LoweringError(
						f"method {type_name}.{decl.name} already declared", loc=self._span(decl)
					)
				methods[decl.name] = method
				logger.debug("lowered method %s.%s", type_name, decl.name)
		logger.debug("compiled package: %d functions, %d types with methods", len(funcs), len(types))
		return ir.Package(funcs=funcs, types=types)

	def _enter_file(self, file: ast.File) -> None:
		self._filename = file.filename
		self._imports = {}
		for spec in file.imports:
			local = spec.name or spec.path.rsplit("/", 1)[-1]
			self._imports[local] = spec.path

	def _collect_gen_decl(self, decl: ast.GenDecl) -> None:
		if decl.tok == "var":
			raise UnsupportedConstructError(
				"Package-level var declarations not implemented", loc=self._span(decl)
			)
		for spec in decl.specs:
			# Non-struct type declarations carry nothing the IR needs.
			if isinstance(spec, ast.TypeSpec) and isinstance(spec.type, ast.StructType):
				self.ctx.struct_defs[spec.name] = spec.type

	# --- functions and methods ---

	def lower_func(self, decl: ast.FuncDecl) -> ir.FuncDecl:
		self.ctx.active_vars = set()
		self._loop_depth = 0
		if decl.recv is not None:
			self.ctx.active_vars.update(decl.recv.names)

		param_names: List[str] = []
		for param in decl.type.params:
			names = param.names or ["_"]
			param_names.extend(names)
			self.ctx.active_vars.update(param.names)

		prologue: List[ir.Stmt] = []
		self._named_results = [name for result in decl.type.results for name in result.names]
		if self._named_results:
			targets: List[ir.Expr] = []
			zeros: List[ir.Expr] = []
			for result in decl.type.results:
				zero = zero_value_expr(result.type, self.ctx.struct_defs, self._span(result))
				for name in result.names:
					targets.append(ir.IdentExpr(name))
					zeros.append(zero)
			self.ctx.active_vars.update(self._named_results)
			prologue.append(ir.AssignStmt(lhs=targets, rhs=zeros))

		body = self.lower_block(decl.body)
		if prologue:
			body = ir.BlockStmt(stmts=prologue + list(body.stmts))
		return ir.FuncDecl(param_names=param_names, body=body)

	def lower_method(self, decl: ast.FuncDecl) -> Tuple[str, ir.MethodDecl]:
		assert decl.recv is not None
		type_name, is_pointer = self._receiver_type(decl.recv)
		receiver_name = decl.recv.names[0] if decl.recv.names else "_"
		method = ir.MethodDecl(
			receiver_name=receiver_name,
			is_pointer=is_pointer,
			func=self.lower_func(decl),
		)
		return type_name, method

	def _receiver_type(self, recv: ast.Field) -> Tuple[str, bool]:
		"""Receiver types are `T` (by value) or `*T` (by reference), nothing else."""
		if isinstance(recv.type, ast.Ident):
			return recv.type.name, False
		if isinstance(recv.type, ast.StarExpr) and isinstance(recv.type.x, ast.Ident):
			return recv.type.x.name, True
		raise LoweringError("Unexpected receiver type.", loc=self._span(recv))

	# --- statements ---

	def lower_stmt(self, stmt: ast.Stmt) -> ir.Stmt:
		method = getattr(self, f"visit_stmt_{type(stmt).__name__}", None)
		if method is None:
			raise UnsupportedConstructError(
				f"Statement compile not implemented: {type(stmt).__name__}", loc=self._span(stmt)
			)
		return method(stmt)

	def lower_block(self, block: ast.BlockStmt) -> ir.BlockStmt:
		return ir.BlockStmt(stmts=[self.lower_stmt(s) for s in block.stmts])

	def _lower_optional_stmt(self, stmt: Optional[ast.Stmt]) -> ir.Stmt:
		return ir.EmptyStmt() if stmt is None else self.lower_stmt(stmt)

	def visit_stmt_DeclStmt(self, stmt: ast.DeclStmt) -> ir.Stmt:
		if stmt.decl.tok != "var":
			raise UnsupportedConstructError(
				f"Declaration not implemented: {stmt.decl.tok}", loc=self._span(stmt)
			)
		assigns = [self._lower_value_spec(spec) for spec in stmt.decl.specs]
		if len(assigns) == 1:
			return assigns[0]
		# Specs of a group run in order so later ones can read earlier ones.
		return ir.BlockStmt(stmts=assigns)

	def _lower_value_spec(self, spec: ast.Node) -> ir.Stmt:
		if not isinstance(spec, ast.ValueSpec):
			raise LoweringError("Unexpected spec", loc=self._span(spec))
		span = self._span(spec)
		if spec.values:
			rhs = [self.lower_expr(v) for v in spec.values]
		elif spec.type is not None:
			zero = zero_value_expr(spec.type, self.ctx.struct_defs, span)
			rhs = [zero] * len(spec.names)
		else:
			raise LoweringError("var declaration needs a type or a value", loc=span)
		self.ctx.active_vars.update(spec.names)
		lhs: List[ir.Expr] = [ir.IdentExpr(name) for name in spec.names]
		return ir.AssignStmt(lhs=lhs, rhs=rhs)

	def visit_stmt_ExprStmt(self, stmt: ast.ExprStmt) -> ir.Stmt:
		return ir.ExprStmt(self.lower_expr(stmt.x))

	def visit_stmt_IncDecStmt(self, stmt: ast.IncDecStmt) -> ir.Stmt:
		op = INC_DEC_OPERATORS.get(stmt.tok)
		if op is None:
			raise UnsupportedConstructError(f"Operator not implemented: {stmt.tok}", loc=self._span(stmt))
		# The target is evaluated twice: once read, once written.
		target = self.lower_expr(stmt.x)
		update = ir.CallExpr(func=ir.LiteralExpr(op), args=[target, ir.LiteralExpr(1)])
		return ir.AssignStmt(lhs=[target], rhs=[update])

	def visit_stmt_AssignStmt(self, stmt: ast.AssignStmt) -> ir.Stmt:
		span = self._span(stmt)
		if stmt.tok in ("=", ":="):
			rhs = [self.lower_expr(e) for e in stmt.rhs]
			for target in stmt.lhs:
				if isinstance(target, ast.Ident):
					self.ctx.active_vars.add(target.name)
			lhs = [self.lower_expr(e) for e in stmt.lhs]
			return ir.AssignStmt(lhs=lhs, rhs=rhs)

		op = ASSIGN_BINARY_OPERATORS.get(stmt.tok)
		if op is None:
			raise UnsupportedConstructError(f"Operator not implemented: {stmt.tok}", loc=span)
		if len(stmt.lhs) != 1 or len(stmt.rhs) != 1:
			raise LoweringError("Unexpected multiple assign", loc=span)
		# Same double evaluation of the target as for ++/--.
		target = self.lower_expr(stmt.lhs[0])
		update = ir.CallExpr(func=ir.LiteralExpr(op), args=[target, self.lower_expr(stmt.rhs[0])])
		return ir.AssignStmt(lhs=[target], rhs=[update])

	def visit_stmt_ReturnStmt(self, stmt: ast.ReturnStmt) -> ir.Stmt:
		if not stmt.results and self._named_results:
			return ir.ReturnStmt(results=[ir.IdentExpr(name) for name in self._named_results])
		return ir.ReturnStmt(results=[self.lower_expr(e) for e in stmt.results])

	def visit_stmt_BranchStmt(self, stmt: ast.BranchStmt) -> ir.Stmt:
		if stmt.tok != "break":
			raise UnsupportedConstructError(
				f"Unsupported branch statement: {stmt.tok}", loc=self._span(stmt)
			)
		if self._loop_depth == 0:
			raise LoweringError("break is not in a loop", loc=self._span(stmt))
		return ir.BreakStmt()

	def visit_stmt_BlockStmt(self, stmt: ast.BlockStmt) -> ir.Stmt:
		return self.lower_block(stmt)

	def visit_stmt_IfStmt(self, stmt: ast.IfStmt) -> ir.Stmt:
		init = self._lower_optional_stmt(stmt.init)
		return ir.IfStmt(
			init=init,
			cond=self.lower_expr(stmt.cond),
			body=self.lower_block(stmt.body),
			else_=self._lower_optional_stmt(stmt.else_),
		)

	def visit_stmt_ForStmt(self, stmt: ast.ForStmt) -> ir.Stmt:
		init = self._lower_optional_stmt(stmt.init)
		cond = ir.LiteralExpr(True) if stmt.cond is None else self.lower_expr(stmt.cond)
		post = self._lower_optional_stmt(stmt.post)
		self._loop_depth += 1
		try:
			body = self.lower_block(stmt.body)
		finally:
			self._loop_depth -= 1
		return ir.ForStmt(init=init, cond=cond, post=post, body=body)

	# --- expressions ---

	def lower_expr(self, expr: ast.Expr) -> ir.Expr:
		method = getattr(self, f"visit_expr_{type(expr).__name__}", None)
		if method is None:
			raise UnsupportedConstructError(
				f"Expression compile not implemented: {type(expr).__name__}", loc=self._span(expr)
			)
		return method(expr)

	def visit_expr_Ident(self, expr: ast.Ident) -> ir.Expr:
		if expr.name not in self.ctx.active_vars and expr.name in _PREDECLARED_CONSTANTS:
			return ir.LiteralExpr(_PREDECLARED_CONSTANTS[expr.name])
		return ir.IdentExpr(expr.name)

	def visit_expr_BasicLit(self, expr: ast.BasicLit) -> ir.Expr:
		return ir.LiteralExpr(parse_literal(expr, self._span(expr)))

	def visit_expr_SelectorExpr(self, expr: ast.SelectorExpr) -> ir.Expr:
		if isinstance(expr.x, ast.Ident) and expr.x.name not in self.ctx.active_vars:
			return self._lower_package_member(expr.x.name, expr.sel, self._span(expr))
		return ir.FieldAccessExpr(e=self.lower_expr(expr.x), name=expr.sel)

	def _lower_package_member(self, pkg_name: str, member: str, span: Span) -> ir.Expr:
		path = self._imports.get(pkg_name, pkg_name)
		package = self.ctx.native_packages.get(path)
		if package is None:
			raise LoweringError(f"Unknown package {pkg_name}", loc=span)
		if member not in package:
			raise LoweringError(f"Unknown function {pkg_name}.{member}", loc=span)
		return ir.LiteralExpr(package.lookup(member))

	def visit_expr_IndexExpr(self, expr: ast.IndexExpr) -> ir.Expr:
		return ir.IndexExpr(e=self.lower_expr(expr.x), index=self.lower_expr(expr.index))

	def visit_expr_CallExpr(self, expr: ast.CallExpr) -> ir.Expr:
		func = self.lower_expr(expr.fun)
		return ir.CallExpr(func=func, args=[self.lower_expr(a) for a in expr.args])

	def visit_expr_BinaryExpr(self, expr: ast.BinaryExpr) -> ir.Expr:
		op = BINARY_OPERATORS.get(expr.op)
		if op is None:
			raise UnsupportedConstructError(f"Operator not implemented: {expr.op}", loc=self._span(expr))
		return ir.CallExpr(
			func=ir.LiteralExpr(op),
			args=[self.lower_expr(expr.x), self.lower_expr(expr.y)],
		)

	def visit_expr_UnaryExpr(self, expr: ast.UnaryExpr) -> ir.Expr:
		op = UNARY_OPERATORS.get(expr.op)
		if op is None:
			raise UnsupportedConstructError(f"Operator not implemented: {expr.op}", loc=self._span(expr))
		return ir.CallExpr(func=ir.LiteralExpr(op), args=[self.lower_expr(expr.x)])

	def visit_expr_CompositeLit(self, expr: ast.CompositeLit) -> ir.Expr:
		span = self._span(expr)
		lit_type = expr.type
		if isinstance(lit_type, ast.ArrayType):
			return self._lower_sequence_literal(lit_type, expr.elts, span)
		if isinstance(lit_type, ast.Ident):
			if lit_type.name not in self.ctx.struct_defs:
				raise LoweringError(f"Unknown struct {lit_type.name}", loc=span)
			return self._lower_struct_literal(lit_type.name, expr.elts, span)
		raise UnsupportedConstructError(
			f"Composite literal not implemented: {type(lit_type).__name__}", loc=span
		)

	def _lower_sequence_literal(self, lit_type: ast.ArrayType, elts: List[ast.Expr], span: Span) -> ir.Expr:
		vals: List[ir.Expr] = []
		for elt in elts:
			if isinstance(elt, ast.KeyValueExpr):
				raise UnsupportedConstructError("Indexed array literal elements not implemented", loc=span)
			vals.append(self.lower_expr(elt))
		elt_type = element_type_expr(lit_type.elt, span)
		if lit_type.len is None:
			return ir.SliceLiteralExpr(type=elt_type, vals=vals)
		if not isinstance(lit_type.len, ast.Ellipsis):
			length = array_length(lit_type.len, span)
			if len(vals) > length:
				raise LoweringError(f"array index {length} out of bounds [0:{length}]", loc=span)
			zero = zero_value_expr(lit_type.elt, self.ctx.struct_defs, span)
			vals.extend([zero] * (length - len(vals)))
		return ir.ArrayLiteralExpr(type=elt_type, vals=vals)

	def _lower_struct_literal(self, type_name: str, elts: List[ast.Expr], span: Span) -> ir.Expr:
		# Start from the zero of every field, then overlay what is written.
		values, field_names = struct_zero_fields(type_name, self.ctx.struct_defs, span)
		for i, elt in enumerate(elts):
			if isinstance(elt, ast.KeyValueExpr):
				if not isinstance(elt.key, ast.Ident):
					raise LoweringError("Expected identifier as struct literal key.", loc=span)
				if elt.key.name not in values:
					raise LoweringError(f"unknown field {elt.key.name} in struct literal of type {type_name}", loc=span)
				values[elt.key.name] = self.lower_expr(elt.value)
				continue
			if i >= len(field_names):
				raise LoweringError(f"too many values in struct literal of type {type_name}", loc=span)
			values[field_names[i]] = self.lower_expr(elt)
		return ir.StructLiteralExpr(type_name=type_name, initial_values=values)

	def _span(self, node: object) -> Span:
		return Span.from_loc(getattr(node, "loc", None), file=self._filename)


__all__ = ["CompileContext", "compile_package", "SourceToIR"]

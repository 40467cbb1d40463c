# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree-walking evaluator over the IR.

Pipeline placement:
  IR Package (golite/stage1) → Evaluator.call → result values

Expressions evaluate to ExprResults (expr_result.py) so assignment targets
and plain reads share one code path. Statements communicate return and break
through the Context signal slots; no host exception is used for control
flow. Errors raise EvalError, `panic` raises GoPanic, and nothing here
catches either.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from golite.core.errors import EvalError
from golite.stage1 import ir_nodes as ir
from golite.stage1.zero_values import INT_TYPES

from .builtins import resolve_builtin
from .context import Context
from .expr_result import ElementLValue, ExprResult, RValue, StructFieldLValue
from .values import (
	FunctionValue,
	NativeValue,
	StructValue,
	Value,
	create_method_value,
	create_package_func_value,
	describe,
)

logger = logging.getLogger(__name__)

_ELEMENT_TYPES = INT_TYPES | {"string", "bool"}


class Evaluator:
	"""Evaluates calls into one compiled Package."""

	def __init__(self, package: ir.Package) -> None:
		self.package = package

	# --- calls ---

	def call(self, func_value: Value, args: List[Value]) -> List[Value]:
		"""Invoke an interpreted or native function value; returns its results."""
		if isinstance(func_value, FunctionValue):
			return self._call_function(func_value, args)
		if isinstance(func_value, NativeValue) and callable(func_value.val):
			return self._call_native(func_value.val, args)
		raise EvalError(f"cannot call non-function {describe(func_value)}")

	def call_by_name(self, name: str, args: List[Value]) -> List[Value]:
		return self.call(create_package_func_value(self.package, name), args)

	def _call_function(self, func_value: FunctionValue, args: List[Value]) -> List[Value]:
		decl = func_value.func_decl
		if len(args) != len(decl.param_names):
			raise EvalError(
				f"wrong number of arguments: want {len(decl.param_names)}, got {len(args)}"
			)
		logger.debug("enter func(%s)", ", ".join(decl.param_names))
		ctx = Context(self.package)
		for name, arg in zip(decl.param_names, args):
			ctx.assign_value(name, arg)
		# Bound variables go in after the parameters and win on a name clash.
		for name, value in func_value.bound_variables.items():
			ctx.assign_value(name, value)
		self.exec_stmt(ctx, decl.body)
		if ctx.should_break:
			raise EvalError("break is not in a loop")
		return ctx.return_values if ctx.return_values is not None else []

	def _call_native(self, func: Callable[..., Any], args: List[Value]) -> List[Value]:
		result = func(*[arg.as_native() for arg in args])
		if result is None:
			return []
		if isinstance(result, tuple):
			return [NativeValue(r) for r in result]
		return [NativeValue(result)]

	# --- statements ---

	def exec_stmt(self, ctx: Context, stmt: ir.Stmt) -> None:
		if isinstance(stmt, ir.ExprStmt):
			if isinstance(stmt.e, ir.CallExpr):
				# Statement calls may return any number of results.
				self._eval_call(ctx, stmt.e)
			else:
				self.eval_expr(ctx, stmt.e).get()
			return
		if isinstance(stmt, ir.AssignStmt):
			self._exec_assign(ctx, stmt)
			return
		if isinstance(stmt, ir.BlockStmt):
			for child in stmt.stmts:
				self.exec_stmt(ctx, child)
				if ctx.signalled:
					return
			return
		if isinstance(stmt, ir.EmptyStmt):
			return
		if isinstance(stmt, ir.IfStmt):
			self.exec_stmt(ctx, stmt.init)
			if self._eval_condition(ctx, stmt.cond):
				self.exec_stmt(ctx, stmt.body)
			else:
				self.exec_stmt(ctx, stmt.else_)
			return
		if isinstance(stmt, ir.ForStmt):
			self._exec_for(ctx, stmt)
			return
		if isinstance(stmt, ir.BreakStmt):
			ctx.should_break = True
			return
		if isinstance(stmt, ir.ReturnStmt):
			ctx.return_values = [self.eval_expr(ctx, e).get() for e in stmt.results]
			return
		raise EvalError(f"Statement eval not implemented: {type(stmt).__name__}")

	def _exec_assign(self, ctx: Context, stmt: ir.AssignStmt) -> None:
		if len(stmt.lhs) != len(stmt.rhs):
			raise EvalError(
				f"assignment mismatch: {len(stmt.lhs)} variables but {len(stmt.rhs)} values"
			)
		# Read every source before touching any target: `a, b = b, a` swaps.
		values = [self.eval_expr(ctx, e).get() for e in stmt.rhs]
		for target, value in zip(stmt.lhs, values):
			self.eval_expr(ctx, target).set(value)

	def _exec_for(self, ctx: Context, stmt: ir.ForStmt) -> None:
		self.exec_stmt(ctx, stmt.init)
		while self._eval_condition(ctx, stmt.cond):
			self.exec_stmt(ctx, stmt.body)
			if ctx.should_break:
				ctx.should_break = False
				return
			if ctx.return_values is not None:
				return
			self.exec_stmt(ctx, stmt.post)

	def _eval_condition(self, ctx: Context, cond: ir.Expr) -> bool:
		val = self.eval_expr(ctx, cond).get().as_native()
		if not isinstance(val, bool):
			raise EvalError(f"non-boolean condition: {describe(NativeValue(val))}")
		return val

	# --- expressions ---

	def eval_expr(self, ctx: Context, expr: ir.Expr) -> ExprResult:
		if isinstance(expr, ir.CallExpr):
			return RValue(self._single_result(self._eval_call(ctx, expr)))
		if isinstance(expr, ir.IdentExpr):
			return ctx.resolve_value(expr.name)
		if isinstance(expr, ir.LiteralExpr):
			return RValue(NativeValue(expr.val))
		if isinstance(expr, ir.IndexExpr):
			return self._eval_index(ctx, expr)
		if isinstance(expr, ir.FieldAccessExpr):
			return self._eval_field_access(ctx, expr)
		if isinstance(expr, (ir.SliceLiteralExpr, ir.ArrayLiteralExpr)):
			self._check_element_type(expr.type)
			vals = [self.eval_expr(ctx, v).get().as_native() for v in expr.vals]
			return RValue(NativeValue(vals))
		if isinstance(expr, ir.StructLiteralExpr):
			# Field initializers include the zero values, so this is complete.
			values = {name: self.eval_expr(ctx, e).get() for name, e in expr.initial_values.items()}
			return RValue(StructValue(expr.type_name, values))
		raise EvalError(f"Expression eval not implemented: {type(expr).__name__}")

	def _eval_call(self, ctx: Context, expr: ir.CallExpr) -> List[Value]:
		builtin = resolve_builtin(ctx, expr)
		if builtin is not None:
			return builtin(self, ctx, expr)
		func_value = self.eval_expr(ctx, expr.func).get()
		args = [self.eval_expr(ctx, arg).get() for arg in expr.args]
		return self.call(func_value, args)

	def _single_result(self, results: List[Value]) -> Value:
		if not results:
			return NativeValue(None)
		if len(results) > 1:
			raise EvalError(f"multiple-value call ({len(results)} values) used as a single value")
		return results[0]

	def _eval_index(self, ctx: Context, expr: ir.IndexExpr) -> ExprResult:
		container = self.eval_expr(ctx, expr.e).get().as_native()
		index = self.eval_expr(ctx, expr.index).get().as_native()
		if not isinstance(container, list):
			raise EvalError(f"cannot index {describe(NativeValue(container))}")
		if not isinstance(index, int) or isinstance(index, bool):
			raise EvalError(f"invalid index {describe(NativeValue(index))}: must be an integer")
		if not 0 <= index < len(container):
			raise EvalError(f"index out of range [{index}] with length {len(container)}")
		return ElementLValue(container, index)

	def _eval_field_access(self, ctx: Context, expr: ir.FieldAccessExpr) -> ExprResult:
		value = self.eval_expr(ctx, expr.e).get()
		if not isinstance(value, StructValue):
			raise EvalError(f"Unsupported field access .{expr.name} on {describe(value)}")
		# Methods shadow fields of the same name.
		type_decl = self.package.types.get(value.type_name)
		if type_decl is not None and expr.name in type_decl.methods:
			return RValue(create_method_value(type_decl.methods[expr.name], value))
		if expr.name in value.values:
			return StructFieldLValue(value, expr.name)
		raise EvalError(f"Field not found: {expr.name}")

	def _check_element_type(self, type_expr: ir.Expr) -> None:
		if not isinstance(type_expr, ir.IdentExpr):
			raise EvalError(f"Type expression not implemented: {type(type_expr).__name__}")
		if type_expr.name not in _ELEMENT_TYPES:
			raise EvalError(f"Type not implemented: {type_expr.name}")


__all__ = ["Evaluator", "create_package_func_value", "create_method_value"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-call evaluation context.

A Context holds the locals of one function invocation and the two control
flow signal slots:

  return_values  None while the function runs; the (possibly empty) result
                 list once a return statement executed
  should_break   set by `break`, cleared by the innermost enclosing loop

Compound statements check the signals after every child statement, which is
how return and break unwind without host exceptions.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from golite.stage1 import ir_nodes as ir

from .expr_result import ExprResult, RValue, VariableLValue
from .values import UNDEFINED, Value, create_package_func_value


class Context:
	def __init__(self, package: ir.Package) -> None:
		self.package = package
		self.locals: Dict[str, Value] = {}
		self.return_values: Optional[List[Value]] = None
		self.should_break = False

	@property
	def signalled(self) -> bool:
		"""True once a return or break is unwinding."""
		return self.return_values is not None or self.should_break

	def resolve_value(self, name: str) -> ExprResult:
		"""
		Look `name` up as a local, then as a package function.

		An unknown name becomes a new local holding UNDEFINED; reading it as a
		host value later fails.
		"""
		if name in self.locals:
			return VariableLValue(self.locals, name)
		if name in self.package.funcs:
			return RValue(create_package_func_value(self.package, name))
		self.locals[name] = UNDEFINED
		return VariableLValue(self.locals, name)

	def is_name_valid(self, name: str) -> bool:
		return name in self.locals or name in self.package.funcs

	def assign_value(self, name: str, value: Value) -> None:
		self.locals[name] = value


__all__ = ["Context"]

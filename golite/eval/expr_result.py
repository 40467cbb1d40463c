# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Expression results: the read/write capability returned by expression
evaluation.

Every expression evaluates to an ExprResult. `get()` reads the current value;
`set()` overwrites the storage the expression denotes. Only RValue, the
result of a computation, refuses writes. Each variant holds what it needs to
perform the write without evaluating the addressing expression again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from golite.core.errors import EvalError

from .values import NativeValue, StructValue, Value


class ExprResult:
	"""Base class for expression results."""

	def get(self) -> Value:
		raise NotImplementedError

	def set(self, value: Value) -> None:
		raise NotImplementedError


@dataclass
class RValue(ExprResult):
	value: Value

	def get(self) -> Value:
		return self.value

	def set(self, value: Value) -> None:
		raise EvalError("cannot assign to a computed value")


@dataclass
class VariableLValue(ExprResult):
	"""A named local in a call context."""

	locals: Dict[str, Value]
	name: str

	def get(self) -> Value:
		return self.locals[self.name]

	def set(self, value: Value) -> None:
		self.locals[self.name] = value


@dataclass
class ElementLValue(ExprResult):
	"""
	Element of a host list (array or slice storage).

	Reads wrap a copy of the element; writes go into the list in place, so
	every holder of the list sees them.
	"""

	container: List[Any]
	index: int

	def get(self) -> Value:
		return NativeValue(self.container[self.index])

	def set(self, value: Value) -> None:
		self.container[self.index] = value.as_native()


@dataclass
class StructFieldLValue(ExprResult):
	struct: StructValue
	name: str

	def get(self) -> Value:
		return self.struct.values[self.name]

	def set(self, value: Value) -> None:
		self.struct.values[self.name] = value


__all__ = ["ExprResult", "RValue", "VariableLValue", "ElementLValue", "StructFieldLValue"]

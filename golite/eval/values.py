# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime values.

  NativeValue    opaque host value (int, str, bool, list, host callable)
  StructValue    type name + field map; the only value with fields/methods
  FunctionValue  IR function + pre-bound variables (method receivers)
  UNDEFINED      placeholder for a name read before it was ever assigned

`copy()` is the value-copy used for by-value method receivers. Native values
copy shallowly; struct values copy their field map, applying each field's own
`copy()`; function values get a new wrapper around the same bound-variable
map, so two copies of a bound method share their receiver binding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from golite.core.errors import EvalError
from golite.runtime.native import format_value
from golite.stage1 import ir_nodes as ir


class Value:
	"""Base class for runtime values."""

	def as_native(self) -> Any:
		"""Host representation, for passing to native code and operators."""
		raise NotImplementedError

	def copy(self) -> "Value":
		raise NotImplementedError


@dataclass(eq=False)
class NativeValue(Value):
	val: Any

	def as_native(self) -> Any:
		return self.val

	def copy(self) -> "NativeValue":
		return NativeValue(self.val)


@dataclass(eq=False)
class StructValue(Value):
	type_name: str
	values: Dict[str, Value] = field(default_factory=dict)

	def as_native(self) -> Any:
		raise EvalError(f"Cannot convert struct value of type {self.type_name} to native value.")

	def copy(self) -> "StructValue":
		return StructValue(self.type_name, {name: value.copy() for name, value in self.values.items()})


@dataclass(eq=False)
class FunctionValue(Value):
	func_decl: ir.FuncDecl
	bound_variables: Dict[str, Value] = field(default_factory=dict)

	def as_native(self) -> Any:
		raise EvalError("Cannot convert function value to native value.")

	def copy(self) -> "FunctionValue":
		return FunctionValue(self.func_decl, self.bound_variables)


class UndefinedValue(Value):
	def as_native(self) -> Any:
		raise EvalError("use of undefined value")

	def copy(self) -> "UndefinedValue":
		return self

	def __repr__(self) -> str:
		return "UNDEFINED"


UNDEFINED = UndefinedValue()


def describe(value: Value) -> str:
	"""Go `%v`-style rendering of a runtime value (panic messages)."""
	if isinstance(value, NativeValue):
		return format_value(value.val)
	if isinstance(value, StructValue):
		return "{" + " ".join(describe(v) for v in value.values.values()) + "}"
	if isinstance(value, FunctionValue):
		return "<func>"
	return "<undefined>"


def create_package_func_value(package: ir.Package, name: str) -> FunctionValue:
	"""Callable value for the top-level function `name` of `package`."""
	func = package.funcs.get(name)
	if func is None:
		raise EvalError(f"undefined: {name}")
	return FunctionValue(func, {})


def create_method_value(method: ir.MethodDecl, receiver: Value) -> FunctionValue:
	"""
	Bind `receiver` to `method`.

	A by-value receiver is copied here, when the method value is created, not
	when it is later called: `f := v.M; v.x = 1; f()` sees the old `v`.
	A pointer receiver is bound as is, so mutations are shared.
	"""
	if not method.is_pointer:
		receiver = receiver.copy()
	return FunctionValue(method.func, {method.receiver_name: receiver})


__all__ = [
	"Value",
	"NativeValue",
	"StructValue",
	"FunctionValue",
	"UndefinedValue",
	"UNDEFINED",
	"describe",
	"create_package_func_value",
	"create_method_value",
]

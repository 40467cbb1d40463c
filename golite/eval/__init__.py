# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree-walking evaluator over the stage1 IR.

Public API:
  - Evaluator(package).call(func_value, args)
  - create_package_func_value / create_method_value to build callees
  - the runtime value classes
"""

from .builtins import BUILTINS
from .context import Context
from .evaluator import Evaluator
from .expr_result import ElementLValue, ExprResult, RValue, StructFieldLValue, VariableLValue
from .values import (
	UNDEFINED,
	FunctionValue,
	NativeValue,
	StructValue,
	Value,
	create_method_value,
	create_package_func_value,
	describe,
)

__all__ = [
	"BUILTINS",
	"Context",
	"Evaluator",
	"ExprResult",
	"RValue",
	"VariableLValue",
	"ElementLValue",
	"StructFieldLValue",
	"Value",
	"NativeValue",
	"StructValue",
	"FunctionValue",
	"UNDEFINED",
	"describe",
	"create_package_func_value",
	"create_method_value",
]

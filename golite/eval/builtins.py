# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Builtin functions.

Builtins get the unevaluated call and evaluate their arguments themselves.
They are weak names: a call to `panic(...)` only reaches the builtin when no
local and no package function is called `panic`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from golite.core.errors import EvalError, GoPanic
from golite.stage1 import ir_nodes as ir

from .context import Context
from .values import NativeValue, Value, describe

if TYPE_CHECKING:
	from .evaluator import Evaluator

BuiltinFunc = Callable[["Evaluator", Context, ir.CallExpr], List[Value]]


def _expect_args(name: str, call: ir.CallExpr, count: int) -> None:
	if len(call.args) != count:
		raise EvalError(f"wrong number of arguments to {name}: want {count}, got {len(call.args)}")


def panic_builtin(evaluator: "Evaluator", ctx: Context, call: ir.CallExpr) -> List[Value]:
	"""Abort the run with the evaluated argument as payload. Never returns."""
	_expect_args("panic", call, 1)
	payload = evaluator.eval_expr(ctx, call.args[0]).get()
	raise GoPanic(payload, describe(payload))


def len_builtin(evaluator: "Evaluator", ctx: Context, call: ir.CallExpr) -> List[Value]:
	_expect_args("len", call, 1)
	val = evaluator.eval_expr(ctx, call.args[0]).get().as_native()
	if val is None:
		return [NativeValue(0)]
	if isinstance(val, str):
		# Go strings are measured in bytes.
		return [NativeValue(len(val.encode("utf-8")))]
	if isinstance(val, list):
		return [NativeValue(len(val))]
	raise EvalError(f"invalid argument for len: {describe(NativeValue(val))}")


def append_builtin(evaluator: "Evaluator", ctx: Context, call: ir.CallExpr) -> List[Value]:
	if not call.args:
		raise EvalError("not enough arguments for append")
	base = evaluator.eval_expr(ctx, call.args[0]).get().as_native()
	if base is None:
		base = []
	if not isinstance(base, list):
		raise EvalError(f"first argument to append must be a slice, got {describe(NativeValue(base))}")
	extra = [evaluator.eval_expr(ctx, arg).get().as_native() for arg in call.args[1:]]
	return [NativeValue(base + extra)]


BUILTINS: Dict[str, BuiltinFunc] = {
	"panic": panic_builtin,
	"len": len_builtin,
	"append": append_builtin,
}


def resolve_builtin(ctx: Context, call: ir.CallExpr) -> Optional[BuiltinFunc]:
	"""The builtin `call` targets, or None when it is an ordinary call."""
	func = call.func
	if not isinstance(func, ir.IdentExpr):
		return None
	if ctx.is_name_valid(func.name):
		return None
	return BUILTINS.get(func.name)


__all__ = ["BUILTINS", "BuiltinFunc", "resolve_builtin"]

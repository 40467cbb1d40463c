# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime operator table.

The lowering pass rewrites every Go operator into a call to one of these
functions (wrapped in a LiteralExpr), so the evaluator never sees an operator.
Each function takes and returns host values.

Integer semantics follow Go where Python differs: `/` truncates toward zero
and `%` takes the sign of the dividend. `&&` and `||` evaluate both operands;
there is no short-circuiting once an operator is a plain call.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from golite.core.errors import EvalError


def add(x: Any, y: Any) -> Any:
	return x + y


def sub(x: Any, y: Any) -> Any:
	return x - y


def mul(x: Any, y: Any) -> Any:
	return x * y


def quo(x: int, y: int) -> int:
	if y == 0:
		raise EvalError("integer divide by zero")
	q = abs(x) // abs(y)
	return q if (x >= 0) == (y >= 0) else -q


def rem(x: int, y: int) -> int:
	if y == 0:
		raise EvalError("integer divide by zero")
	return x - quo(x, y) * y


def less(x: Any, y: Any) -> bool:
	return x < y


def greater(x: Any, y: Any) -> bool:
	return x > y


def leq(x: Any, y: Any) -> bool:
	return x <= y


def geq(x: Any, y: Any) -> bool:
	return x >= y


def equal(x: Any, y: Any) -> bool:
	return x == y


def neq(x: Any, y: Any) -> bool:
	return x != y


def lor(x: bool, y: bool) -> bool:
	return x or y


def land(x: bool, y: bool) -> bool:
	return x and y


def bit_and(x: int, y: int) -> int:
	return x & y


def bit_or(x: int, y: int) -> int:
	return x | y


def bit_xor(x: int, y: int) -> int:
	return x ^ y


def shl(x: int, y: int) -> int:
	if y < 0:
		raise EvalError("negative shift amount")
	return x << y


def shr(x: int, y: int) -> int:
	if y < 0:
		raise EvalError("negative shift amount")
	return x >> y


def neg(x: Any) -> Any:
	return -x


def pos(x: Any) -> Any:
	return +x


def lnot(x: bool) -> bool:
	return not x


BINARY_OPERATORS: Dict[str, Callable[..., Any]] = {
	"+": add,
	"-": sub,
	"*": mul,
	"/": quo,
	"%": rem,
	"<": less,
	">": greater,
	"<=": leq,
	">=": geq,
	"==": equal,
	"!=": neq,
	"||": lor,
	"&&": land,
	"&": bit_and,
	"|": bit_or,
	"^": bit_xor,
	"<<": shl,
	">>": shr,
}

ASSIGN_BINARY_OPERATORS: Dict[str, Callable[..., Any]] = {
	"+=": add,
	"-=": sub,
	"*=": mul,
	"/=": quo,
	"%=": rem,
	"&=": bit_and,
	"|=": bit_or,
	"^=": bit_xor,
	"<<=": shl,
	">>=": shr,
}

INC_DEC_OPERATORS: Dict[str, Callable[..., Any]] = {
	"++": add,
	"--": sub,
}

UNARY_OPERATORS: Dict[str, Callable[..., Any]] = {
	"-": neg,
	"+": pos,
	"!": lnot,
}


__all__ = [
	"BINARY_OPERATORS",
	"ASSIGN_BINARY_OPERATORS",
	"INC_DEC_OPERATORS",
	"UNARY_OPERATORS",
]

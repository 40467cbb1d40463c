# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Native packages: named bundles of host callables and global values.

The lowering pass resolves `pkg.Member` selectors against these packages and
embeds the host object in a LiteralExpr. At call time the evaluator passes
plain host values (ints, strings, bools, lists) and wraps the result.

Only the parts of Go's fmt, time, strings and strconv that programs in the
supported subset need are provided.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List

from golite.core.errors import EvalError


@dataclass
class NativePackage:
	name: str
	funcs: Dict[str, Callable[..., Any]] = field(default_factory=dict)
	globals: Dict[str, Any] = field(default_factory=dict)

	def __contains__(self, member: str) -> bool:
		return member in self.funcs or member in self.globals

	def lookup(self, member: str) -> Any:
		"""Resolve a member, functions before globals. KeyError if unknown."""
		if member in self.funcs:
			return self.funcs[member]
		if member in self.globals:
			return self.globals[member]
		raise KeyError(member)


# Value rendering (fmt's %v)

def format_value(value: Any) -> str:
	if value is None:
		return "<nil>"
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, list):
		return "[" + " ".join(format_value(v) for v in value) + "]"
	return str(value)


def _spaced(args: List[Any], always: bool) -> str:
	# Print adds a space only between operands when neither is a string;
	# Println always does.
	out = []
	for i, arg in enumerate(args):
		if i > 0 and (always or not (isinstance(arg, str) or isinstance(args[i - 1], str))):
			out.append(" ")
		out.append(format_value(arg))
	return "".join(out)


def _format_verb(verb: str, arg: Any) -> str:
	if verb == "v":
		return format_value(arg)
	if verb == "d" and isinstance(arg, int) and not isinstance(arg, bool):
		return str(int(arg))
	if verb == "s" and isinstance(arg, str):
		return arg
	if verb == "t" and isinstance(arg, bool):
		return format_value(arg)
	if verb == "q" and isinstance(arg, str):
		return json.dumps(arg, ensure_ascii=False)
	return f"%!{verb}({format_value(arg)})"


def _sprintf(fmt: str, *args: Any) -> str:
	out = []
	arg_index = 0
	i = 0
	while i < len(fmt):
		ch = fmt[i]
		if ch != "%" or i + 1 >= len(fmt):
			out.append(ch)
			i += 1
			continue
		verb = fmt[i + 1]
		i += 2
		if verb == "%":
			out.append("%")
			continue
		if arg_index >= len(args):
			out.append(f"%!{verb}(MISSING)")
			continue
		out.append(_format_verb(verb, args[arg_index]))
		arg_index += 1
	return "".join(out)


def _print(*args: Any) -> None:
	sys.stdout.write(_spaced(list(args), always=False))


def _println(*args: Any) -> None:
	sys.stdout.write(_spaced(list(args), always=True) + "\n")


def _printf(fmt: str, *args: Any) -> None:
	sys.stdout.write(_sprintf(fmt, *args))


def _sprint(*args: Any) -> str:
	return _spaced(list(args), always=False)


def _sprintln(*args: Any) -> str:
	return _spaced(list(args), always=True) + "\n"


# time

class Duration(int):
	"""Nanosecond count that renders like Go's time.Duration."""

	def __str__(self) -> str:
		ns = int(self)
		if ns == 0:
			return "0s"
		sign = "-" if ns < 0 else ""
		ns = abs(ns)
		if ns < 1_000:
			return f"{sign}{ns}ns"
		if ns < 1_000_000:
			return f"{sign}{_fraction(ns, 1_000)}µs"
		if ns < 1_000_000_000:
			return f"{sign}{_fraction(ns, 1_000_000)}ms"
		hours, rest = divmod(ns, 3_600_000_000_000)
		minutes, rest = divmod(rest, 60_000_000_000)
		text = ""
		if hours:
			text += f"{hours}h"
		if hours or minutes:
			text += f"{minutes}m"
		return f"{sign}{text}{_fraction(rest, 1_000_000_000)}s"

	def __repr__(self) -> str:
		return f"Duration({int(self)})"

	# Arithmetic with plain ints stays a Duration, as `2 * time.Second` does in Go.

	def __add__(self, other):
		return Duration(int(self) + other)

	__radd__ = __add__

	def __sub__(self, other):
		return Duration(int(self) - other)

	def __rsub__(self, other):
		return Duration(other - int(self))

	def __mul__(self, other):
		return Duration(int(self) * other)

	__rmul__ = __mul__

	def __neg__(self):
		return Duration(-int(self))

	def __pos__(self):
		return self


def _fraction(value: int, unit: int) -> str:
	whole, rest = divmod(value, unit)
	if not rest:
		return str(whole)
	digits = str(rest).rjust(len(str(unit)) - 1, "0").rstrip("0")
	return f"{whole}.{digits}"


def _since(start: datetime) -> Duration:
	return Duration((datetime.now() - start) // timedelta(microseconds=1) * 1_000)


# strings / strconv

def _repeat(s: str, count: int) -> str:
	if count < 0:
		raise EvalError("strings: negative Repeat count")
	return s * count


def _contains(s: str, substr: str) -> bool:
	return substr in s


FMT = NativePackage(
	name="fmt",
	funcs={
		"Print": _print,
		"Println": _println,
		"Printf": _printf,
		"Sprint": _sprint,
		"Sprintln": _sprintln,
		"Sprintf": _sprintf,
	},
)

TIME = NativePackage(
	name="time",
	funcs={
		"Now": datetime.now,
		"Since": _since,
	},
	globals={
		"Nanosecond": Duration(1),
		"Microsecond": Duration(1_000),
		"Millisecond": Duration(1_000_000),
		"Second": Duration(1_000_000_000),
		"Minute": Duration(60_000_000_000),
		"Hour": Duration(3_600_000_000_000),
	},
)

STRINGS = NativePackage(
	name="strings",
	funcs={
		"Repeat": _repeat,
		"ToUpper": str.upper,
		"ToLower": str.lower,
		"Contains": _contains,
		"HasPrefix": str.startswith,
		"HasSuffix": str.endswith,
		"TrimSpace": str.strip,
	},
)

STRCONV = NativePackage(
	name="strconv",
	funcs={
		"Itoa": str,
	},
)

STANDARD_PACKAGES: Dict[str, NativePackage] = {
	pkg.name: pkg for pkg in (FMT, TIME, STRINGS, STRCONV)
}


__all__ = [
	"NativePackage",
	"Duration",
	"format_value",
	"FMT",
	"TIME",
	"STRINGS",
	"STRCONV",
	"STANDARD_PACKAGES",
]

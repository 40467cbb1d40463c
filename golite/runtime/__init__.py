# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Host-side runtime: the operator table and the native packages."""

from .native import STANDARD_PACKAGES, Duration, NativePackage, format_value
from .operators import (
	ASSIGN_BINARY_OPERATORS,
	BINARY_OPERATORS,
	INC_DEC_OPERATORS,
	UNARY_OPERATORS,
)

__all__ = [
	"ASSIGN_BINARY_OPERATORS",
	"BINARY_OPERATORS",
	"INC_DEC_OPERATORS",
	"UNARY_OPERATORS",
	"STANDARD_PACKAGES",
	"Duration",
	"NativePackage",
	"format_value",
]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage 1 package: the lowered IR and AST→IR lowering.

Pipeline placement:
  parser (AST) → stage1 (IR) → eval

Public API:
  - IR node classes (`ir_nodes`, usually imported as `ir`)
  - CompileContext / compile_package lowering entry point
  - IR text dump (format_package)
"""

from . import ir_nodes as ir
from .ir_printer import format_expr, format_package, format_stmt
from .lower import CompileContext, SourceToIR, compile_package

__all__ = [
	"ir",
	"CompileContext",
	"SourceToIR",
	"compile_package",
	"format_expr",
	"format_package",
	"format_stmt",
]

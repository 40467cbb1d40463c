# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
golite: a lowering pass and tree-walking evaluator for a small Go subset.

Stages:
  parser:  Go source → source AST (golite.parser.ast)
  stage1:  source AST → operator-free IR (golite.stage1.ir_nodes)
  eval:    IR → results, by direct tree walking

The runtime package holds the operator table and the native packages that
selector expressions like `fmt.Println` resolve against at lowering time.
"""

__version__ = "0.3.0"

__all__ = ["core", "parser", "stage1", "runtime", "eval", "driver"]

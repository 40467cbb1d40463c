# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Go front end: lark grammar, post-lexers and the source AST.

Produces `golite.parser.ast.File` trees for the lowering pass. The core never
depends on anything here beyond the AST node classes.
"""

from . import ast
from .parser import parse_file, parse_source

__all__ = ["ast", "parse_file", "parse_source"]

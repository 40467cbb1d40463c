# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lowered IR.

Pipeline placement:
  AST (golite/parser/ast.py) → lower.py → IR (this file) → golite/eval

The IR has no operators, no syntactic sugar and no implicit control flow:

  - every operator is a CallExpr on a LiteralExpr wrapping a runtime
    operator function,
  - IfStmt and ForStmt always carry all of their parts (EmptyStmt and a
    `true` literal stand in for absent ones),
  - literals are fully resolved host values, never re-parsed.

Nodes are frozen once built. The evaluator mutates runtime values only,
never the IR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


# Base node kinds

class IRNode:
	"""Base class for all IR nodes."""
	pass


class Expr(IRNode):
	"""Base class for IR expressions."""
	pass


class Stmt(IRNode):
	"""Base class for IR statements."""
	pass


# Expressions

@dataclass(frozen=True)
class CallExpr(Expr):
	func: Expr
	args: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class IdentExpr(Expr):
	name: str


@dataclass(frozen=True)
class LiteralExpr(Expr):
	"""Already-resolved host value: int, str, bool or a host callable."""
	val: Any


@dataclass(frozen=True)
class IndexExpr(Expr):
	e: Expr
	index: Expr


@dataclass(frozen=True)
class FieldAccessExpr(Expr):
	"""`e.name`; resolved to a method or a field at evaluation time."""
	e: Expr
	name: str


@dataclass(frozen=True)
class SliceLiteralExpr(Expr):
	"""Dynamically sized sequence; `type` is the element type expression."""
	type: Expr
	vals: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class ArrayLiteralExpr(Expr):
	"""Fixed-size sequence; the size is the number of `vals`."""
	type: Expr
	vals: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class StructLiteralExpr(Expr):
	"""
	Struct construction.

	`initial_values` always holds every declared field of `type_name`, in
	declaration order; fields the source left out carry their zero value.
	"""
	type_name: str
	initial_values: Dict[str, Expr] = field(default_factory=dict)


# Statements

@dataclass(frozen=True)
class ExprStmt(Stmt):
	e: Expr


@dataclass(frozen=True)
class AssignStmt(Stmt):
	"""Parallel assignment: `lhs[i] = rhs[i]`, all right sides read first."""
	lhs: List[Expr]
	rhs: List[Expr]


@dataclass(frozen=True)
class BlockStmt(Stmt):
	stmts: List[Stmt] = field(default_factory=list)


@dataclass(frozen=True)
class EmptyStmt(Stmt):
	pass


@dataclass(frozen=True)
class IfStmt(Stmt):
	init: Stmt
	cond: Expr
	body: Stmt
	else_: Stmt


@dataclass(frozen=True)
class ForStmt(Stmt):
	init: Stmt
	cond: Expr
	post: Stmt
	body: Stmt


@dataclass(frozen=True)
class BreakStmt(Stmt):
	pass


@dataclass(frozen=True)
class ReturnStmt(Stmt):
	results: List[Expr] = field(default_factory=list)


# Declarations

@dataclass(frozen=True)
class FuncDecl(IRNode):
	"""Declared parameter names (`_` for unnamed ones) and the body."""
	param_names: List[str]
	body: Stmt


@dataclass(frozen=True)
class MethodDecl(IRNode):
	"""
	Method body plus receiver binding.

	The receiver is bound under `receiver_name` before the body runs; it is
	not part of `func.param_names`. `is_pointer` selects by-reference binding,
	otherwise the receiver is copied when the method value is created.
	"""
	receiver_name: str
	is_pointer: bool
	func: FuncDecl


@dataclass(frozen=True)
class TypeDecl(IRNode):
	methods: Dict[str, MethodDecl] = field(default_factory=dict)


@dataclass(frozen=True)
class Package(IRNode):
	"""Free functions by name and, per type name, the type's methods."""
	funcs: Dict[str, FuncDecl] = field(default_factory=dict)
	types: Dict[str, TypeDecl] = field(default_factory=dict)


__all__ = [
	"IRNode",
	"Expr",
	"Stmt",
	"CallExpr",
	"IdentExpr",
	"LiteralExpr",
	"IndexExpr",
	"FieldAccessExpr",
	"SliceLiteralExpr",
	"ArrayLiteralExpr",
	"StructLiteralExpr",
	"ExprStmt",
	"AssignStmt",
	"BlockStmt",
	"EmptyStmt",
	"IfStmt",
	"ForStmt",
	"BreakStmt",
	"ReturnStmt",
	"FuncDecl",
	"MethodDecl",
	"TypeDecl",
	"Package",
]

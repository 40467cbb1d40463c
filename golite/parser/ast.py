# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source AST for the Go subset.

Pipeline placement:
  Go source → AST (this file) → IR (golite/stage1) → evaluation

The node shapes follow Go's own `go/ast` package closely so the lowering pass
reads like a walk over a regular Go syntax tree. Nodes are purely syntactic:
no name resolution or typing is recorded here. Every node carries an
optional `loc` (a `Located`) for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Located:
	line: int
	column: int


# Base classes

class Node:
	"""Base class for all AST nodes."""
	pass


class Expr(Node):
	"""Base class for expressions (type expressions included)."""
	pass


class Stmt(Node):
	"""Base class for statements."""
	pass


class Decl(Node):
	"""Base class for top-level declarations."""
	pass


class LitKind(Enum):
	"""Token kind of a BasicLit."""
	INT = "INT"
	FLOAT = "FLOAT"
	IMAG = "IMAG"
	CHAR = "CHAR"
	STRING = "STRING"


# Expressions

@dataclass
class Ident(Expr):
	name: str
	loc: Optional[Located] = None


@dataclass
class BasicLit(Expr):
	"""
	Literal exactly as written in the source.

	`value` is the raw token text: quotes, base prefixes and escapes are kept
	so that the lowering pass decides how to interpret it.
	"""
	kind: LitKind
	value: str
	loc: Optional[Located] = None


@dataclass
class CompositeLit(Expr):
	"""`T{elts...}`; `type` is an Ident or an ArrayType."""
	type: Optional[Expr]
	elts: List[Expr] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class KeyValueExpr(Expr):
	"""`key: value` inside a composite literal."""
	key: Expr
	value: Expr
	loc: Optional[Located] = None


@dataclass
class SelectorExpr(Expr):
	"""`x.sel`: package member, struct field or method."""
	x: Expr
	sel: str
	loc: Optional[Located] = None


@dataclass
class IndexExpr(Expr):
	x: Expr
	index: Expr
	loc: Optional[Located] = None


@dataclass
class CallExpr(Expr):
	fun: Expr
	args: List[Expr] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class BinaryExpr(Expr):
	"""`x op y`; `op` is the operator token text (e.g. "+", "<=", "||")."""
	op: str
	x: Expr
	y: Expr
	loc: Optional[Located] = None


@dataclass
class UnaryExpr(Expr):
	"""`op x`; `op` is one of - + ! ^ & <-."""
	op: str
	x: Expr
	loc: Optional[Located] = None


@dataclass
class Ellipsis(Expr):
	"""The `...` length of an `[...]T` array type."""
	loc: Optional[Located] = None


@dataclass
class ArrayType(Expr):
	"""`[len]elt`; `len` is None for a slice type, an Ellipsis for `[...]T`."""
	len: Optional[Expr]
	elt: Expr
	loc: Optional[Located] = None


@dataclass
class StarExpr(Expr):
	"""`*x`, as a pointer type or a dereference."""
	x: Expr
	loc: Optional[Located] = None


@dataclass
class Field(Node):
	"""
	One entry of a parameter, result, receiver or struct field list.

	`names` is empty for an unnamed parameter and holds several entries for a
	grouped declaration such as `a, b int`.
	"""
	names: List[str]
	type: Expr
	loc: Optional[Located] = None


@dataclass
class StructType(Expr):
	fields: List[Field] = field(default_factory=list)
	loc: Optional[Located] = None

	def field_names(self) -> List[str]:
		"""Declared field names, in order."""
		return [name for f in self.fields for name in f.names]


@dataclass
class InterfaceType(Expr):
	"""The empty interface `interface{}`; method sets are not supported."""
	loc: Optional[Located] = None


@dataclass
class FuncType(Node):
	params: List[Field] = field(default_factory=list)
	results: List[Field] = field(default_factory=list)
	loc: Optional[Located] = None


# Statements

@dataclass
class BlockStmt(Stmt):
	stmts: List[Stmt] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class ExprStmt(Stmt):
	x: Expr
	loc: Optional[Located] = None


@dataclass
class IncDecStmt(Stmt):
	"""`x++` / `x--`; `tok` is "++" or "--"."""
	x: Expr
	tok: str
	loc: Optional[Located] = None


@dataclass
class AssignStmt(Stmt):
	"""`lhs tok rhs`; `tok` is "=", ":=" or a compound operator like "+="."""
	lhs: List[Expr]
	tok: str
	rhs: List[Expr]
	loc: Optional[Located] = None


@dataclass
class DeclStmt(Stmt):
	"""A declaration inside a function body."""
	decl: "GenDecl"
	loc: Optional[Located] = None


@dataclass
class ReturnStmt(Stmt):
	results: List[Expr] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class BranchStmt(Stmt):
	"""`break` or `continue`; `tok` holds the keyword."""
	tok: str
	loc: Optional[Located] = None


@dataclass
class IfStmt(Stmt):
	init: Optional[Stmt]
	cond: Expr
	body: BlockStmt
	else_: Optional[Stmt] = None
	loc: Optional[Located] = None


@dataclass
class ForStmt(Stmt):
	"""Any of the three `for` forms; absent clauses are None."""
	init: Optional[Stmt]
	cond: Optional[Expr]
	post: Optional[Stmt]
	body: BlockStmt
	loc: Optional[Located] = None


# Declarations

@dataclass
class ImportSpec(Node):
	path: str
	name: Optional[str] = None
	loc: Optional[Located] = None


@dataclass
class ValueSpec(Node):
	"""`names [type] [= values]` inside a var declaration."""
	names: List[str]
	type: Optional[Expr] = None
	values: List[Expr] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class TypeSpec(Node):
	name: str
	type: Expr
	loc: Optional[Located] = None


@dataclass
class GenDecl(Decl):
	"""`var`, `type` or `import` declaration; `tok` holds the keyword."""
	tok: str
	specs: List[Node] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class FuncDecl(Decl):
	"""Function, or method when `recv` is set."""
	name: str
	type: FuncType
	body: BlockStmt
	recv: Optional[Field] = None
	loc: Optional[Located] = None


@dataclass
class File(Node):
	package: str
	imports: List[ImportSpec] = field(default_factory=list)
	decls: List[Decl] = field(default_factory=list)
	filename: Optional[str] = None


__all__ = [
	"Located",
	"Node",
	"Expr",
	"Stmt",
	"Decl",
	"LitKind",
	"Ident",
	"BasicLit",
	"CompositeLit",
	"KeyValueExpr",
	"SelectorExpr",
	"IndexExpr",
	"CallExpr",
	"BinaryExpr",
	"UnaryExpr",
	"Ellipsis",
	"ArrayType",
	"StarExpr",
	"Field",
	"StructType",
	"InterfaceType",
	"FuncType",
	"BlockStmt",
	"ExprStmt",
	"IncDecStmt",
	"AssignStmt",
	"DeclStmt",
	"ReturnStmt",
	"BranchStmt",
	"IfStmt",
	"ForStmt",
	"ImportSpec",
	"ValueSpec",
	"TypeSpec",
	"GenDecl",
	"FuncDecl",
	"File",
]

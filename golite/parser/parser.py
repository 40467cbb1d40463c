# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark front end for the Go subset.

Pipeline placement:
  Go source → parse_source (this file) → AST (golite/parser/ast.py)

The grammar lives in grammar.lark. Two post-lexers run between the lexer and
the LALR parser:

  BlockOpenMarker     marks the `{` that opens an if/for body
  TerminatorInserter  Go's automatic semicolon insertion

The tree → AST builder below is a set of `_build_*` helpers keyed on the
rule/alias names of the grammar.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from golite.core.errors import ParseError
from golite.core.span import Span

from .ast import (
	ArrayType,
	AssignStmt,
	BasicLit,
	BinaryExpr,
	BlockStmt,
	BranchStmt,
	CallExpr,
	CompositeLit,
	Decl,
	DeclStmt,
	Ellipsis,
	Expr,
	ExprStmt,
	Field,
	File,
	ForStmt,
	FuncDecl,
	FuncType,
	GenDecl,
	Ident,
	IfStmt,
	ImportSpec,
	IncDecStmt,
	IndexExpr,
	InterfaceType,
	KeyValueExpr,
	LitKind,
	Located,
	ReturnStmt,
	SelectorExpr,
	StarExpr,
	Stmt,
	StructType,
	TypeSpec,
	UnaryExpr,
	ValueSpec,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class TerminatorInserter:
	"""
	Go's semicolon rule: a newline ends the statement when the last token on
	the line is an identifier, a literal, one of the keywords break/continue/
	return, `++`/`--`, or a closing bracket. Explicit `;` always terminates.
	End of input counts as a newline.
	"""

	always_accept = ("NEWLINE", "SEMI")

	TERMINABLE = {
		"NAME",
		"INT",
		"FLOAT",
		"IMAG",
		"CHAR",
		"STRING",
		"RAW_STRING",
		"_RETURN",
		"_BREAK",
		"_CONTINUE",
		"INC",
		"DEC",
		"_RPAR",
		"_RSQB",
		"_RBRACE",
	}

	def __init__(self) -> None:
		self.can_terminate = False

	def process(self, stream):
		self.can_terminate = False
		last: Optional[Token] = None
		for token in stream:
			ttype = token.type
			if ttype == "NEWLINE":
				if self.can_terminate:
					yield Token.new_borrow_pos("_TERMINATOR", token.value, token)
					self.can_terminate = False
				continue
			if ttype == "SEMI":
				yield Token.new_borrow_pos("_TERMINATOR", token.value, token)
				self.can_terminate = False
				continue
			yield token
			last = token
			self.can_terminate = ttype in self.TERMINABLE
		if self.can_terminate and last is not None:
			yield Token.new_borrow_pos("_TERMINATOR", "", last)
			self.can_terminate = False


class BlockOpenMarker:
	"""
	Retag the `{` that opens an if/for body as _BLOCK_OPEN.

	After `if`/`for`, the first `{` that is not nested in parentheses,
	brackets or braces opens the body. Everything before it is the header,
	where `T{...}` composite literals must be parenthesized, as in Go.
	"""

	OPENERS = {"_LPAR", "_LSQB", "_LBRACE"}
	CLOSERS = {"_RPAR", "_RSQB", "_RBRACE"}

	def process(self, stream):
		in_header = False
		depth = 0
		for token in stream:
			ttype = token.type
			if ttype in ("_IF", "_FOR"):
				in_header = True
				depth = 0
			elif in_header:
				if ttype == "_LBRACE" and depth == 0:
					in_header = False
					yield Token.new_borrow_pos("_BLOCK_OPEN", token.value, token)
					continue
				if ttype in self.OPENERS:
					depth += 1
				elif ttype in self.CLOSERS and depth:
					depth -= 1
			yield token


class GoPostLex:
	"""Combined post-lexer: block-open marking, then terminator insertion."""

	always_accept = TerminatorInserter.always_accept

	def __init__(self) -> None:
		self._blocks = BlockOpenMarker()
		self._terminators = TerminatorInserter()

	def process(self, stream):
		return self._terminators.process(self._blocks.process(stream))


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=GoPostLex(),
)


def parse_source(source: str, filename: Optional[str] = None) -> File:
	"""Parse one Go source file. Raises ParseError on syntax errors."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as err:
		raise ParseError(_describe_unexpected(err), loc=_error_span(err, filename)) from err
	file = _build_file(tree)
	file.filename = filename
	return file


def parse_file(path: Union[str, Path]) -> File:
	path = Path(path)
	return parse_source(path.read_text(encoding="utf-8"), filename=str(path))


_TOKEN_DESCRIPTIONS = {
	"_TERMINATOR": "newline",
	"_BLOCK_OPEN": "{",
	"$END": "end of file",
}


def _describe_unexpected(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedToken):
		token = err.token
		desc = _TOKEN_DESCRIPTIONS.get(token.type)
		if desc is None:
			desc = repr(str(token))
		return f"syntax error: unexpected {desc}"
	if isinstance(err, UnexpectedCharacters):
		return f"syntax error: unexpected character {err.char!r}"
	if isinstance(err, UnexpectedEOF):
		return "syntax error: unexpected end of file"
	return "syntax error"


def _error_span(err: UnexpectedInput, filename: Optional[str]) -> Span:
	line = getattr(err, "line", None)
	column = getattr(err, "column", None)
	if line is None or line < 0:
		return Span(file=filename)
	return Span(file=filename, line=line, column=column)


# Top level

def _build_file(tree: Tree) -> File:
	package = ""
	imports: List[ImportSpec] = []
	decls: List[Decl] = []
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		kind = _name(child)
		if kind == "package_clause":
			package = child.children[0].value
		elif kind == "import_decl":
			imports.extend(_build_import_spec(spec) for spec in _trees(child))
		elif kind == "func_decl":
			decls.append(_build_func_decl(child))
		elif kind == "var_decl":
			decls.append(_build_gen_decl(child, "var"))
		elif kind == "type_decl":
			decls.append(_build_gen_decl(child, "type"))
		else:
			raise ParseError(f"unexpected top-level node {kind}", loc=_loc(child))
	return File(package=package, imports=imports, decls=decls)


def _build_import_spec(tree: Tree) -> ImportSpec:
	tokens = [c for c in tree.children if isinstance(c, Token)]
	path = _unquote(tokens[-1].value)
	name = tokens[0].value if len(tokens) > 1 else None
	return ImportSpec(path=path, name=name, loc=_loc(tree))


def _build_gen_decl(tree: Tree, tok: str) -> GenDecl:
	specs = []
	for spec in _trees(tree):
		if _name(spec) == "var_spec":
			specs.append(_build_value_spec(spec))
		else:
			specs.append(_build_type_spec(spec))
	return GenDecl(tok=tok, specs=specs, loc=_loc(tree))


def _build_value_spec(tree: Tree) -> ValueSpec:
	names: List[str] = []
	type_expr: Optional[Expr] = None
	values: List[Expr] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "name_list":
			names = [tok.value for tok in child.children]
		elif kind == "expr_list":
			values = _build_expr_list(child)
		else:
			type_expr = _build_type(child)
	return ValueSpec(names=names, type=type_expr, values=values, loc=_loc(tree))


def _build_type_spec(tree: Tree) -> TypeSpec:
	name_token, type_node = tree.children
	return TypeSpec(name=name_token.value, type=_build_type(type_node), loc=_loc(tree))


# Types

def _build_type(tree: Tree) -> Expr:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "type_name":
		return Ident(name=tree.children[0].value, loc=loc)
	if kind == "qualified_type":
		pkg, sel = tree.children
		return SelectorExpr(x=Ident(name=pkg.value, loc=_loc_from_token(pkg)), sel=sel.value, loc=loc)
	if kind == "pointer_type":
		return StarExpr(x=_build_type(tree.children[-1]), loc=loc)
	if kind == "slice_type":
		return ArrayType(len=None, elt=_build_type(tree.children[0]), loc=loc)
	if kind == "array_type":
		length, elt = tree.children
		return ArrayType(len=_build_expr(length), elt=_build_type(elt), loc=loc)
	if kind == "ellipsis_array_type":
		return ArrayType(len=Ellipsis(loc=loc), elt=_build_type(tree.children[0]), loc=loc)
	if kind == "struct_type":
		return StructType(fields=[_build_field_decl(f) for f in _trees(tree)], loc=loc)
	if kind == "interface_type":
		return InterfaceType(loc=loc)
	raise ParseError(f"unexpected type node {kind}", loc=loc)


def _build_field_decl(tree: Tree) -> Field:
	names = [c.value for c in tree.children if isinstance(c, Token)]
	type_node = tree.children[-1]
	return Field(names=names, type=_build_type(type_node), loc=_loc(tree))


# Functions

def _build_func_decl(tree: Tree) -> FuncDecl:
	recv: Optional[Field] = None
	name = ""
	func_type = FuncType()
	body = BlockStmt()
	for child in tree.children:
		if isinstance(child, Token):
			name = child.value
			continue
		kind = _name(child)
		if kind == "receiver":
			recv = _build_receiver(child)
		elif kind == "signature":
			func_type = _build_signature(child)
		elif kind == "block":
			body = _build_block(child)
	return FuncDecl(name=name, type=func_type, body=body, recv=recv, loc=_loc(tree))


def _build_receiver(tree: Tree) -> Field:
	names = [c.value for c in tree.children if isinstance(c, Token)]
	type_node = tree.children[-1]
	return Field(names=names, type=_build_type(type_node), loc=_loc(tree))


def _build_signature(tree: Tree) -> FuncType:
	params: List[Field] = []
	results: List[Field] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "param_list":
			params = _build_param_list(child)
		elif kind == "type_result":
			results = [Field(names=[], type=_build_type(child.children[0]), loc=_loc(child))]
		elif kind == "tuple_result":
			lists = _trees(child)
			results = _build_param_list(lists[0]) if lists else []
	return FuncType(params=params, results=results, loc=_loc(tree))


def _build_param_list(tree: Tree) -> List[Field]:
	"""
	Resolve Go's parameter grouping.

	`(a, b int, s string)` parses as bare(a), named(b int), named(s string):
	once any entry is named, every bare entry is a name that shares the type
	of the next named entry. Without named entries every item is a type.
	"""
	items = _trees(tree)
	if not any(_name(item) == "named_param" for item in items):
		return [Field(names=[], type=_build_type(item.children[0]), loc=_loc(item)) for item in items]
	fields: List[Field] = []
	pending: List[str] = []
	for item in items:
		if _name(item) == "bare_param":
			type_node = item.children[0]
			if _name(type_node) != "type_name":
				raise ParseError("syntax error: mixed named and unnamed parameters", loc=_loc(item))
			pending.append(type_node.children[0].value)
			continue
		name_token, type_node = item.children
		pending.append(name_token.value)
		fields.append(Field(names=pending, type=_build_type(type_node), loc=_loc(item)))
		pending = []
	if pending:
		raise ParseError("syntax error: mixed named and unnamed parameters", loc=_loc(tree))
	return fields


# Statements

def _build_block(tree: Tree) -> BlockStmt:
	return BlockStmt(stmts=[_build_stmt(child) for child in _trees(tree)], loc=_loc(tree))


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "expr_stmt":
		return ExprStmt(x=_build_expr(tree.children[0]), loc=loc)
	if kind == "inc_dec_stmt":
		target, tok = tree.children
		return IncDecStmt(x=_build_expr(target), tok=tok.value, loc=loc)
	if kind in ("assign_stmt", "define_stmt"):
		lhs, rhs = tree.children
		tok = "=" if kind == "assign_stmt" else ":="
		return AssignStmt(lhs=_build_expr_list(lhs), tok=tok, rhs=_build_expr_list(rhs), loc=loc)
	if kind == "op_assign_stmt":
		lhs, tok, rhs = tree.children
		return AssignStmt(lhs=[_build_expr(lhs)], tok=tok.value, rhs=[_build_expr(rhs)], loc=loc)
	if kind == "var_decl":
		return DeclStmt(decl=_build_gen_decl(tree, "var"), loc=loc)
	if kind in ("block", "ctrl_block"):
		return _build_block(tree)
	if kind == "if_stmt":
		return _build_if_stmt(tree)
	if kind in ("for_forever", "for_cond", "for_clause"):
		return _build_for_stmt(tree)
	if kind == "return_stmt":
		lists = _trees(tree)
		results = _build_expr_list(lists[0]) if lists else []
		return ReturnStmt(results=results, loc=loc)
	if kind == "break_stmt":
		return BranchStmt(tok="break", loc=loc)
	if kind == "continue_stmt":
		return BranchStmt(tok="continue", loc=loc)
	raise ParseError(f"unexpected statement node {kind}", loc=loc)


def _build_if_stmt(tree: Tree) -> IfStmt:
	children = _trees(tree)
	init: Optional[Stmt] = None
	if _name(children[0]) == "if_init":
		init = _build_stmt(children[0].children[0])
		children = children[1:]
	cond = _build_expr(children[0])
	body = _build_block(children[1])
	else_: Optional[Stmt] = None
	if len(children) > 2:
		else_ = _build_stmt(children[2])
	return IfStmt(init=init, cond=cond, body=body, else_=else_, loc=_loc(tree))


def _build_for_stmt(tree: Tree) -> ForStmt:
	kind = _name(tree)
	children = _trees(tree)
	body = _build_block(children[-1])
	init: Optional[Stmt] = None
	cond: Optional[Expr] = None
	post: Optional[Stmt] = None
	if kind == "for_cond":
		cond = _build_expr(children[0])
	elif kind == "for_clause":
		init_node, test_node, post_node = children[0], children[1], children[2]
		if init_node.children:
			init = _build_stmt(init_node.children[0])
		if test_node.children:
			cond = _build_expr(test_node.children[0])
		if post_node.children:
			post = _build_stmt(post_node.children[0])
	return ForStmt(init=init, cond=cond, post=post, body=body, loc=_loc(tree))


# Expressions

_LITERAL_KINDS = {
	"int_lit": LitKind.INT,
	"float_lit": LitKind.FLOAT,
	"imag_lit": LitKind.IMAG,
	"char_lit": LitKind.CHAR,
	"string_lit": LitKind.STRING,
	"raw_string_lit": LitKind.STRING,
}


def _build_expr_list(tree: Tree) -> List[Expr]:
	return [_build_expr(child) for child in tree.children]


def _build_expr(tree: Tree) -> Expr:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "ident":
		return Ident(name=tree.children[0].value, loc=loc)
	if kind in _LITERAL_KINDS:
		return BasicLit(kind=_LITERAL_KINDS[kind], value=tree.children[0].value, loc=loc)
	if kind == "binary":
		x, op, y = tree.children
		return BinaryExpr(op=op.value, x=_build_expr(x), y=_build_expr(y), loc=loc)
	if kind == "unary":
		op, x = tree.children
		if op.type == "STAR":
			return StarExpr(x=_build_expr(x), loc=loc)
		return UnaryExpr(op=op.value, x=_build_expr(x), loc=loc)
	if kind == "selector":
		x, sel = tree.children
		return SelectorExpr(x=_build_expr(x), sel=sel.value, loc=loc)
	if kind == "index":
		x, index = tree.children
		return IndexExpr(x=_build_expr(x), index=_build_expr(index), loc=loc)
	if kind == "call":
		fun, *args = tree.children
		return CallExpr(fun=_build_expr(fun), args=[_build_expr(a) for a in args], loc=loc)
	if kind == "composite_lit":
		type_node, *elements = tree.children
		return CompositeLit(
			type=_build_type(type_node),
			elts=[_build_element(e) for e in elements],
			loc=loc,
		)
	raise ParseError(f"unexpected expression node {kind}", loc=loc)


def _build_element(tree: Tree) -> Expr:
	if _name(tree) == "keyed_element":
		key, value = tree.children
		return KeyValueExpr(key=_build_expr(key), value=_build_expr(value), loc=_loc(tree))
	return _build_expr(tree)


# Helpers

def _unquote(text: str) -> str:
	return text[1:-1]


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _loc(tree: Tree) -> Optional[Located]:
	meta = tree.meta
	if meta.empty:
		return None
	return Located(line=meta.line, column=meta.column)


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_source", "parse_file", "TerminatorInserter", "BlockOpenMarker", "GoPostLex"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""IR text dump tests: pin the lowering of a small program end to end."""

from __future__ import annotations

from golite.parser import parse_source
from golite.runtime import operators
from golite.runtime.native import STANDARD_PACKAGES
from golite.stage1 import CompileContext, compile_package, format_expr, format_package, format_stmt, ir


COUNTER_SRC = """package main

import "fmt"

type Counter struct {
	n int
}

func (c *Counter) Inc() {
	c.n++
}

func main() {
	var c Counter
	for i := 0; i < 3; i++ {
		if i == 1 {
			break
		}
		c.Inc()
	}
	fmt.Println(c.n)
}
"""


def test_format_package_of_lowered_program():
	file = parse_source(COUNTER_SRC)
	package = compile_package(CompileContext(native_packages=STANDARD_PACKAGES), [file])
	expected = "\n".join(
		[
			"func main() {",
			"  c = Counter{n: 0}",
			"  for i = 0; less(i, 3); i = add(i, 1) {",
			"    if equal(i, 1) {",
			"      break",
			"    }",
			"    c.Inc()",
			"  }",
			"  fmt.Println(c.n)",
			"}",
			"",
			"func (c *Counter) Inc() {",
			"  c.n = add(c.n, 1)",
			"}",
			"",
		]
	)
	assert format_package(package) == expected


def test_functions_are_sorted_by_name():
	b = ir.FuncDecl(param_names=["x"], body=ir.BlockStmt(stmts=[ir.ReturnStmt()]))
	a = ir.FuncDecl(param_names=[], body=ir.BlockStmt())
	text = format_package(ir.Package(funcs={"b": b, "a": a}))
	assert text == "func a() {\n}\n\nfunc b(x) {\n  return\n}\n"


def test_format_literals():
	assert format_expr(ir.LiteralExpr(None)) == "nil"
	assert format_expr(ir.LiteralExpr(True)) == "true"
	assert format_expr(ir.LiteralExpr('say "hi"\n')) == '"say \\"hi\\"\\n"'
	assert format_expr(ir.LiteralExpr(operators.quo)) == "quo"
	assert format_expr(ir.LiteralExpr(STANDARD_PACKAGES["strings"].funcs["Repeat"])) == "strings.Repeat"


def test_format_sequence_and_struct_literals():
	one = ir.LiteralExpr(1)
	assert format_expr(ir.SliceLiteralExpr(type=ir.IdentExpr("int"), vals=[one])) == "[]int{1}"
	assert format_expr(ir.ArrayLiteralExpr(type=ir.IdentExpr("int"), vals=[one, one])) == "[2]int{1, 1}"
	assert format_expr(ir.StructLiteralExpr(type_name="P", initial_values={"x": one})) == "P{x: 1}"
	assert format_expr(ir.IndexExpr(e=ir.IdentExpr("a"), index=one)) == "a[1]"


def test_format_if_with_init_and_else():
	stmt = ir.IfStmt(
		init=ir.AssignStmt(lhs=[ir.IdentExpr("x")], rhs=[ir.LiteralExpr(1)]),
		cond=ir.IdentExpr("x"),
		body=ir.BlockStmt(stmts=[ir.ExprStmt(ir.CallExpr(func=ir.IdentExpr("f")))]),
		else_=ir.BlockStmt(stmts=[ir.EmptyStmt()]),
	)
	assert format_stmt(stmt) == "if x = 1; x {\n  f()\n} else {\n  <empty>\n}"


def test_nested_block_statement():
	stmt = ir.BlockStmt(stmts=[ir.BreakStmt()])
	assert format_stmt(stmt, 1) == "  {\n    break\n  }"

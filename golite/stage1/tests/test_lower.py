# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage1 (AST → IR) lowering tests.

These tests exercise the supported lowering:
  - operator desugaring into runtime operator calls
  - var declarations → zero-value assignments
  - native package members → literals; locals → field access
  - struct/array/slice literals completed with zero values
  - methods, named results, absent if/for parts
Sources are parsed from small Go snippets; expected IR is built by hand.
"""

from __future__ import annotations

from golite.parser import ast, parse_source
from golite.runtime import operators
from golite.runtime.native import FMT, STANDARD_PACKAGES, TIME
from golite.stage1 import CompileContext, compile_package, ir


def _compile(src: str) -> ir.Package:
	file = parse_source(src, filename="t.go")
	return compile_package(CompileContext(native_packages=STANDARD_PACKAGES), [file])


def _body(stmts_src: str, prelude: str = "") -> list:
	src = "package main\n\nimport \"fmt\"\n\n" + prelude + "\nfunc f(a int) {\n" + stmts_src + "\n}\n"
	return list(_compile(src).funcs["f"].body.stmts)


def _op(func, *args) -> ir.CallExpr:
	return ir.CallExpr(func=ir.LiteralExpr(func), args=list(args))


A = ir.IdentExpr("a")
X = ir.IdentExpr("x")


def test_binary_operator_becomes_operator_call():
	(stmt,) = _body("x := a + 1*2")
	assert stmt == ir.AssignStmt(
		lhs=[X],
		rhs=[_op(operators.add, A, _op(operators.mul, ir.LiteralExpr(1), ir.LiteralExpr(2)))],
	)


def test_unary_operators():
	(stmt,) = _body("x := -a")
	assert stmt.rhs == [_op(operators.neg, A)]
	(stmt,) = _body("x := !true")
	assert stmt.rhs == [_op(operators.lnot, ir.LiteralExpr(True))]


def test_inc_dec_lowers_target_twice():
	(stmt,) = _body("a++")
	assert stmt == ir.AssignStmt(lhs=[A], rhs=[_op(operators.add, A, ir.LiteralExpr(1))])
	(stmt,) = _body("a--")
	assert stmt.rhs == [_op(operators.sub, A, ir.LiteralExpr(1))]


def test_compound_assignment():
	(stmt,) = _body("a <<= 2")
	assert stmt == ir.AssignStmt(lhs=[A], rhs=[_op(operators.shl, A, ir.LiteralExpr(2))])


def test_var_without_value_is_zero_assignment():
	stmts = _body("var x int\nvar s string\nvar b, c bool")
	assert stmts == [
		ir.AssignStmt(lhs=[X], rhs=[ir.LiteralExpr(0)]),
		ir.AssignStmt(lhs=[ir.IdentExpr("s")], rhs=[ir.LiteralExpr("")]),
		ir.AssignStmt(
			lhs=[ir.IdentExpr("b"), ir.IdentExpr("c")],
			rhs=[ir.LiteralExpr(False), ir.LiteralExpr(False)],
		),
	]


def test_var_group_becomes_block_in_order():
	(stmt,) = _body("var (\n\tx = 2\n\ty = x\n)")
	assert stmt == ir.BlockStmt(
		stmts=[
			ir.AssignStmt(lhs=[X], rhs=[ir.LiteralExpr(2)]),
			ir.AssignStmt(lhs=[ir.IdentExpr("y")], rhs=[X]),
		]
	)


def test_struct_var_is_fully_zeroed():
	prelude = "type Inner struct {\n\tok bool\n}\n\ntype Outer struct {\n\tn int\n\tin Inner\n\tname string\n}\n"
	(stmt,) = _body("var o Outer", prelude)
	assert stmt.rhs == [
		ir.StructLiteralExpr(
			type_name="Outer",
			initial_values={
				"n": ir.LiteralExpr(0),
				"in": ir.StructLiteralExpr(type_name="Inner", initial_values={"ok": ir.LiteralExpr(False)}),
				"name": ir.LiteralExpr(""),
			},
		)
	]


def test_native_member_resolves_to_literal():
	(stmt,) = _body('fmt.Println("hi", a)')
	assert stmt == ir.ExprStmt(
		ir.CallExpr(func=ir.LiteralExpr(FMT.funcs["Println"]), args=[ir.LiteralExpr("hi"), A])
	)


def test_native_global_resolves_to_its_value():
	src = 'package main\n\nimport "time"\n\nfunc f() {\n\td := time.Second\n}\n'
	(stmt,) = _compile(src).funcs["f"].body.stmts
	assert stmt.rhs == [ir.LiteralExpr(TIME.globals["Second"])]


def test_import_alias_names_the_package():
	src = 'package main\n\nimport out "fmt"\n\nfunc f() {\n\tout.Print(1)\n}\n'
	(stmt,) = _compile(src).funcs["f"].body.stmts
	assert stmt.e.func == ir.LiteralExpr(FMT.funcs["Print"])


def test_selector_on_local_is_field_access():
	(stmt,) = _body("x := a.b.c")
	assert stmt.rhs == [ir.FieldAccessExpr(e=ir.FieldAccessExpr(e=A, name="b"), name="c")]


def test_predeclared_constants_unless_shadowed():
	(stmt,) = _body("x := nil")
	assert stmt.rhs == [ir.LiteralExpr(None)]
	first, second = _body("true := 1\nx := true")
	assert first.rhs == [ir.LiteralExpr(1)]
	assert second.rhs == [ir.IdentExpr("true")]


def test_define_reads_right_side_before_declaring():
	# `fmt := ...` makes fmt a local only after its own right side is lowered.
	first, second = _body('fmt := fmt.Sprint(1)\nx := fmt.y')
	assert first.rhs[0].func == ir.LiteralExpr(FMT.funcs["Sprint"])
	assert second.rhs == [ir.FieldAccessExpr(e=ir.IdentExpr("fmt"), name="y")]


def test_if_without_else_and_init():
	(stmt,) = _body("if a > 0 {\n\ta = 0\n}")
	assert stmt == ir.IfStmt(
		init=ir.EmptyStmt(),
		cond=_op(operators.greater, A, ir.LiteralExpr(0)),
		body=ir.BlockStmt(stmts=[ir.AssignStmt(lhs=[A], rhs=[ir.LiteralExpr(0)])]),
		else_=ir.EmptyStmt(),
	)


def test_if_init_and_else_if():
	(stmt,) = _body("if x := a; x > 0 {\n} else if x < 0 {\n} else {\n}")
	assert stmt.init == ir.AssignStmt(lhs=[X], rhs=[A])
	assert isinstance(stmt.else_, ir.IfStmt)
	assert stmt.else_.else_ == ir.BlockStmt(stmts=[])


def test_for_forever_gets_true_condition():
	(stmt,) = _body("for {\n\tbreak\n}")
	assert stmt == ir.ForStmt(
		init=ir.EmptyStmt(),
		cond=ir.LiteralExpr(True),
		post=ir.EmptyStmt(),
		body=ir.BlockStmt(stmts=[ir.BreakStmt()]),
	)


def test_for_clause():
	(stmt,) = _body("for i := 0; i < a; i++ {\n}")
	i = ir.IdentExpr("i")
	assert stmt.init == ir.AssignStmt(lhs=[i], rhs=[ir.LiteralExpr(0)])
	assert stmt.cond == _op(operators.less, i, A)
	assert stmt.post == ir.AssignStmt(lhs=[i], rhs=[_op(operators.add, i, ir.LiteralExpr(1))])


def test_break_in_nested_block_inside_loop():
	(stmt,) = _body("for {\n\tif a > 1 {\n\t\t{\n\t\t\tbreak\n\t\t}\n\t}\n}")
	inner = stmt.body.stmts[0].body.stmts[0]
	assert inner == ir.BlockStmt(stmts=[ir.BreakStmt()])


def test_struct_literals_positional_keyed_empty():
	prelude = "type P struct {\n\tx, y int\n}\n"
	pos, keyed, empty = _body("p := P{7}\nq := P{y: 12}\nr := P{}", prelude)
	assert pos.rhs[0].initial_values == {"x": ir.LiteralExpr(7), "y": ir.LiteralExpr(0)}
	assert keyed.rhs[0].initial_values == {"x": ir.LiteralExpr(0), "y": ir.LiteralExpr(12)}
	assert empty.rhs[0].initial_values == {"x": ir.LiteralExpr(0), "y": ir.LiteralExpr(0)}
	assert list(pos.rhs[0].initial_values) == ["x", "y"]


def test_mixed_struct_literal_positions_by_index():
	prelude = "type P struct {\n\tx, y int\n}\n"
	(stmt,) = _body("p := P{x: 1, 2}", prelude)
	assert stmt.rhs[0].initial_values == {"x": ir.LiteralExpr(1), "y": ir.LiteralExpr(2)}


def test_array_literal_padded_with_zeros():
	(stmt,) = _body("x := [4]int{1, 2}")
	assert stmt.rhs == [
		ir.ArrayLiteralExpr(
			type=ir.IdentExpr("int"),
			vals=[ir.LiteralExpr(1), ir.LiteralExpr(2), ir.LiteralExpr(0), ir.LiteralExpr(0)],
		)
	]


def test_slice_and_ellipsis_array_literals():
	s, e = _body('s := []string{"a"}\ne := [...]int{4, 8}')
	assert s.rhs == [ir.SliceLiteralExpr(type=ir.IdentExpr("string"), vals=[ir.LiteralExpr("a")])]
	assert e.rhs == [ir.ArrayLiteralExpr(type=ir.IdentExpr("int"), vals=[ir.LiteralExpr(4), ir.LiteralExpr(8)])]


def test_index_expression():
	(stmt,) = _body("x := a[1]")
	assert stmt.rhs == [ir.IndexExpr(e=A, index=ir.LiteralExpr(1))]


def test_methods_by_value_and_by_pointer():
	src = (
		"package main\n\n"
		"type P struct {\n\tx int\n}\n\n"
		"func (p P) Get() int {\n\treturn p.x\n}\n\n"
		"func (p *P) Set(v int) {\n\tp.x = v\n}\n"
	)
	package = _compile(src)
	assert package.funcs == {}
	methods = package.types["P"].methods
	get, set_ = methods["Get"], methods["Set"]
	assert (get.receiver_name, get.is_pointer, get.func.param_names) == ("p", False, [])
	assert (set_.receiver_name, set_.is_pointer, set_.func.param_names) == ("p", True, ["v"])
	assert get.func.body.stmts == [
		ir.ReturnStmt(results=[ir.FieldAccessExpr(e=ir.IdentExpr("p"), name="x")])
	]


def test_named_results_prologue_and_bare_return():
	src = "package main\n\nfunc f() (q, r int) {\n\tq = 1\n\treturn\n}\n"
	func = _compile(src).funcs["f"]
	q, r = ir.IdentExpr("q"), ir.IdentExpr("r")
	assert func.body.stmts == [
		ir.AssignStmt(lhs=[q, r], rhs=[ir.LiteralExpr(0), ir.LiteralExpr(0)]),
		ir.AssignStmt(lhs=[q], rhs=[ir.LiteralExpr(1)]),
		ir.ReturnStmt(results=[q, r]),
	]


def test_unnamed_params_become_underscore():
	src = "package main\n\nfunc f(int, string) {\n}\n"
	assert _compile(src).funcs["f"].param_names == ["_", "_"]


def test_active_vars_reset_per_function():
	src = (
		"package main\n\nimport \"fmt\"\n\n"
		"func f(fmt int) {\n\tfmt.x = 1\n}\n\n"
		"func g() {\n\tfmt.Println()\n}\n"
	)
	package = _compile(src)
	(f_stmt,) = package.funcs["f"].body.stmts
	(g_stmt,) = package.funcs["g"].body.stmts
	assert f_stmt.lhs == [ir.FieldAccessExpr(e=ir.IdentExpr("fmt"), name="x")]
	assert g_stmt.e.func == ir.LiteralExpr(FMT.funcs["Println"])


def test_structs_collected_across_files_before_functions():
	a = parse_source("package main\n\nfunc f() {\n\tvar p P\n}\n", filename="a.go")
	b = parse_source("package main\n\ntype P struct {\n\tx int\n}\n\ntype Alias int\n", filename="b.go")
	ctx = CompileContext(native_packages=STANDARD_PACKAGES)
	package = compile_package(ctx, [a, b])
	assert set(ctx.struct_defs) == {"P"}
	(stmt,) = package.funcs["f"].body.stmts
	assert stmt.rhs == [ir.StructLiteralExpr(type_name="P", initial_values={"x": ir.LiteralExpr(0)})]


def test_hand_built_ast_with_supplied_struct_registry():
	struct = ast.StructType(fields=[ast.Field(names=["n"], type=ast.Ident("int"))])
	decl = ast.FuncDecl(
		name="f",
		type=ast.FuncType(),
		body=ast.BlockStmt(
			stmts=[
				ast.DeclStmt(
					decl=ast.GenDecl(tok="var", specs=[ast.ValueSpec(names=["s"], type=ast.Ident("S"))])
				),
			]
		),
	)
	ctx = CompileContext(struct_defs={"S": struct})
	package = compile_package(ctx, [ast.File(package="main", decls=[decl])])
	(stmt,) = package.funcs["f"].body.stmts
	assert stmt.rhs[0] == ir.StructLiteralExpr(type_name="S", initial_values={"n": ir.LiteralExpr(0)})

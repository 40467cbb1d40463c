# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
End-to-end tests: complete Go programs through parse → lower → evaluate.

Each test loads source text into an Interpreter and calls a function by name
with host arguments; results come back as host values.
"""

from __future__ import annotations

import pytest

from golite.core.errors import EvalError, GoPanic
from golite.driver import Interpreter
from golite.eval import StructValue
from golite.runtime.native import NativePackage


def _interp(body: str) -> Interpreter:
	interp = Interpreter()
	interp.load_source("package main\n\n" + body, filename="main.go")
	return interp


def test_one_plus_one():
	assert _interp("func f() int {\n\treturn 1 + 1\n}\n").call("f") == [2]


FIB = """
func fib(n int) int {
	if n < 2 {
		return 1
	}
	return fib(n-1) + fib(n-2)
}
"""


def test_fib():
	interp = _interp(FIB)
	assert interp.call("fib", 4) == [5]
	assert interp.call("fib", 10) == [89]


def test_uninitialized_locals_are_zero():
	src = """
type Point struct {
	x, y int
	name string
	ok   bool
}

type Line struct {
	a, b Point
}

func f() (int, int, string, bool, int) {
	var n int
	var p Point
	var l Line
	return n, p.y, p.name, p.ok, l.b.x
}
"""
	assert _interp(src).call("f") == [0, 0, "", False, 0]


def test_array_index_read_and_write():
	src = """
func f() (int, int) {
	a := [6]int{4, 8, 15, 16, 23, 42}
	before := a[2]
	a[3] = 5
	return before, a[3]
}
"""
	assert _interp(src).call("f") == [15, 5]


def test_doubling_and_summing():
	src = """
func double() int {
	x := 1
	for i := 0; i < 5; i++ {
		x = x * 2
	}
	return x
}

func sum() int {
	s := 0
	for i := 0; i <= 5; i++ {
		s += i
	}
	return s
}
"""
	interp = _interp(src)
	assert interp.call("double") == [32]
	assert interp.call("sum") == [15]


def test_struct_literal_forms():
	src = """
type S struct {
	x int
}

func f() (int, int, int) {
	a := S{7}
	b := S{x: 12}
	c := S{}
	return a.x, b.x, c.x
}
"""
	assert _interp(src).call("f") == [7, 12, 0]


def test_parallel_assignment_swaps():
	src = "func f() (int, int) {\n\ta, b := 1, 2\n\ta, b = b, a\n\treturn a, b\n}\n"
	assert _interp(src).call("f") == [2, 1]


RECEIVERS = """
type P struct {
	x int
}

func (p P) Get() int {
	return p.x
}

func (p *P) GetRef() int {
	return p.x
}

func (p P) BumpCopy() {
	p.x++
}

func (p *P) Bump() {
	p.x++
}

func snapshot() (int, int) {
	p := P{x: 1}
	byValue := p.Get
	byRef := p.GetRef
	p.x = 2
	return byValue(), byRef()
}

func mutate() (int, int) {
	p := P{}
	p.Bump()
	p.Bump()
	q := P{}
	q.BumpCopy()
	return p.x, q.x
}
"""


def test_by_value_receiver_snapshot_at_bind_time():
	assert _interp(RECEIVERS).call("snapshot") == [1, 2]


def test_by_reference_receiver_mutations_visible():
	assert _interp(RECEIVERS).call("mutate") == [2, 0]


def test_break_in_nested_block_skips_post():
	src = """
func f() (int, int) {
	posts := 0
	i := 0
	for ; i < 10; posts++ {
		if i == 3 {
			{
				break
			}
		}
		i++
	}
	return i, posts
}
"""
	assert _interp(src).call("f") == [3, 3]


def test_forever_loop_with_break_and_else_chain():
	src = """
func classify(n int) string {
	if n < 0 {
		return "neg"
	} else if n == 0 {
		return "zero"
	} else {
		return "pos"
	}
}

func count() int {
	n := 0
	for {
		n++
		if n >= 4 {
			break
		}
	}
	return n
}
"""
	interp = _interp(src)
	assert [interp.call("classify", v)[0] for v in (-3, 0, 8)] == ["neg", "zero", "pos"]
	assert interp.call("count") == [4]


def test_named_results_and_bare_return():
	src = "func divmod(a, b int) (q, r int) {\n\tq = a / b\n\tr = a % b\n\treturn\n}\n"
	interp = _interp(src)
	assert interp.call("divmod", 7, 2) == [3, 1]
	assert interp.call("divmod", -7, 2) == [-3, -1]


def test_slices_append_len():
	src = """
func f() (int, int, int) {
	s := []int{}
	for i := 0; i < 4; i++ {
		s = append(s, i*i)
	}
	return len(s), s[3], len("héllo")
}
"""
	assert _interp(src).call("f") == [4, 9, 6]


def test_slice_assignment_shares_storage():
	src = "func f() int {\n\ta := []int{1, 2}\n\tb := a\n\tb[0] = 9\n\treturn a[0]\n}\n"
	assert _interp(src).call("f") == [9]


def test_fmt_output(capsys):
	src = """
import "fmt"

func main() {
	total := 0
	for i := 1; i <= 3; i++ {
		total += i
	}
	fmt.Println("total:", total, total > 5)
	fmt.Printf("%d-%s\\n", 7, "x")
}
"""
	_interp(src).run_main()
	assert capsys.readouterr().out == "total: 6 true\n7-x\n"


def test_strings_and_strconv():
	src = """
import (
	"strconv"
	s "strings"
)

func f() string {
	return s.ToUpper(s.Repeat("ab", 2)) + strconv.Itoa(3)
}
"""
	assert _interp(src).call("f") == ["ABAB3"]


def test_grouped_var_reads_earlier_spec():
	src = "func f() int {\n\tvar (\n\t\ta = 2\n\t\tb = a * 3\n\t)\n\treturn b\n}\n"
	assert _interp(src).call("f") == [6]


def test_user_function_shadows_builtin():
	src = "func len(x int) int {\n\treturn 42\n}\n\nfunc f() int {\n\treturn len(1)\n}\n"
	assert _interp(src).call("f") == [42]


def test_struct_result_comes_back_as_runtime_value():
	src = "type P struct {\n\tx int\n}\n\nfunc f() P {\n\treturn P{x: 3}\n}\n"
	(result,) = _interp(src).call("f")
	assert isinstance(result, StructValue)
	assert result.values["x"].val == 3


def test_panic_aborts_with_payload():
	src = 'func f() int {\n\tpanic("boom")\n\treturn 1\n}\n'
	with pytest.raises(GoPanic, match="panic: boom"):
		_interp(src).call("f")


def test_runtime_errors_are_fatal():
	src = "func f() int {\n\ta := []int{1}\n\treturn a[4]\n}\n"
	with pytest.raises(EvalError, match=r"index out of range \[4\] with length 1"):
		_interp(src).call("f")
	with pytest.raises(EvalError, match="integer divide by zero"):
		_interp("func g(n int) int {\n\treturn 1 / n\n}\n").call("g", 0)


def test_package_split_across_files():
	interp = Interpreter()
	interp.load_source("package main\n\nfunc f() int {\n\tvar p P\n\treturn p.x + helper()\n}\n", "a.go")
	interp.load_source("package main\n\ntype P struct {\n\tx int\n}\n\nfunc helper() int {\n\treturn 5\n}\n", "b.go")
	assert interp.call("f") == [5]


def test_custom_native_package():
	interp = Interpreter()
	interp.load_native_package(NativePackage(name="mathx", funcs={"Max": max}, globals={"Pi3": 3}))
	interp.load_source("package main\n\nfunc f() int {\n\treturn mathx.Max(2, mathx.Pi3)\n}\n")
	assert interp.call("f") == [3]


def test_loading_more_source_recompiles():
	interp = _interp("func f() int {\n\treturn 1\n}\n")
	assert interp.call("f") == [1]
	interp.load_source("package main\n\nfunc g() int {\n\treturn f() + 1\n}\n")
	assert interp.call("g") == [2]


ASSERTS = """
import "fmt"

func assertEqual(a interface{}, b interface{}) {
	if a != b {
		panic(fmt.Sprint("Expected ", a, ", but got ", b))
	}
}

func fib(n int) int {
	if n < 2 {
		return 1
	}
	return fib(n - 1) + fib(n - 2)
}

func passing() {
	var x interface{}
	assertEqual(nil, x)
	assertEqual(5, fib(4))
	assertEqual("go", "g" + "o")
}

func failing() {
	assertEqual(2, 1 + 2)
}
"""


def test_empty_interface_params():
	interp = _interp(ASSERTS)
	assert interp.call("passing") == []
	with pytest.raises(GoPanic, match="panic: Expected 2, but got 3"):
		interp.call("failing")


def test_zero_slice_is_nil():
	src = """
type Bag struct {
	items []string
}

func f() (bool, int, bool, int) {
	var s []int
	var b Bag
	isNil := s == nil
	s = append(s, 7)
	return isNil, len(s), b.items == nil, len(b.items)
}
"""
	assert _interp(src).call("f") == [True, 1, True, 0]


def test_duration_arithmetic_renders_like_go():
	src = """
import (
	"fmt"
	"time"
)

func f() string {
	return fmt.Sprint(2 * time.Second, " ", time.Second * 90, " ", -time.Millisecond)
}
"""
	assert _interp(src).call("f") == ["2s 1m30s -1ms"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
golite driver: load Go sources, lower them, run a function.

`Interpreter` is the embedding API: hand it native packages and source files,
then call functions by name with host values. `main` is the CLI wrapper and
the only place where golite errors become diagnostics and exit codes:

  0  success
  1  parse, lowering or evaluation error
  2  the program panicked
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from golite.core.diagnostics import Diagnostic
from golite.core.errors import GoliteError, GoPanic
from golite.eval import Evaluator, NativeValue, Value
from golite.parser import ast, parse_file, parse_source
from golite.runtime.native import STANDARD_PACKAGES, NativePackage
from golite.stage1 import CompileContext, compile_package, format_package, ir

logger = logging.getLogger(__name__)


class Interpreter:
	"""
	Sources and native packages of one Go package, compiled on first use.

	Loading another file or native package drops the compiled IR; the next
	call lowers everything again from a fresh CompileContext.
	"""

	def __init__(self, native_packages: Optional[Dict[str, NativePackage]] = None) -> None:
		if native_packages is None:
			native_packages = STANDARD_PACKAGES
		self.native_packages: Dict[str, NativePackage] = dict(native_packages)
		self.files: List[ast.File] = []
		self._package: Optional[ir.Package] = None

	def load_native_package(self, package: NativePackage) -> None:
		self.native_packages[package.name] = package
		self._package = None

	def load_source(self, source: str, filename: Optional[str] = None) -> None:
		self.files.append(parse_source(source, filename=filename))
		self._package = None

	def load_file(self, path: Union[str, Path]) -> None:
		self.files.append(parse_file(path))
		self._package = None

	def load_dir(self, path: Union[str, Path]) -> None:
		"""Load every `*.go` file in `path` (not recursive), in name order."""
		for file_path in sorted(Path(path).glob("*.go")):
			self.load_file(file_path)

	@property
	def package(self) -> ir.Package:
		if self._package is None:
			ctx = CompileContext(native_packages=self.native_packages)
			self._package = compile_package(ctx, self.files)
		return self._package

	def call(self, func_name: str, *host_args: Any) -> List[Any]:
		"""
		Call the top-level function `func_name` with host arguments.

		Results come back as host values, except struct and function values,
		which are returned as runtime Values.
		"""
		evaluator = Evaluator(self.package)
		results = evaluator.call_by_name(func_name, [NativeValue(arg) for arg in host_args])
		return [_to_host(result) for result in results]

	def run_main(self) -> None:
		self.call("main")


def _to_host(value: Value) -> Any:
	if isinstance(value, NativeValue):
		return value.val
	return value


def _report(err: GoliteError, as_json: bool, default_file: Optional[str], exit_code: int = 1) -> None:
	diag = Diagnostic.from_error(err, file=default_file)
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [diag.to_json()]}))
	else:
		print(diag.render(), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
	"""
	Run a Go program.

	Every SOURCE is a `.go` file or a directory holding one package's files;
	all of them are loaded into one package. With --json, errors are printed
	to stdout as structured diagnostics instead of text on stderr.
	"""
	parser = argparse.ArgumentParser(prog="golite", description="Run a Go program in the golite evaluator")
	parser.add_argument("source", type=Path, nargs="+", help="Go source file(s) or package directory")
	parser.add_argument("--entry", default="main", help="Function to run (default: main)")
	parser.add_argument("--dump-ir", action="store_true", help="Print the lowered IR instead of running")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
	args = parser.parse_args(argv)

	logging.basicConfig(
		stream=sys.stderr,
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	source_paths: List[Path] = list(args.source)
	default_file = str(source_paths[0])
	interp = Interpreter()
	try:
		for path in source_paths:
			if path.is_dir():
				interp.load_dir(path)
			else:
				interp.load_file(path)
		if args.dump_ir:
			sys.stdout.write(format_package(interp.package))
			return 0
		logger.debug("running %s", args.entry)
		interp.call(args.entry)
	except GoPanic as err:
		# Text mode prints the bare `panic: ...` line, as `go run` does.
		if args.json:
			_report(err, True, default_file, exit_code=2)
		else:
			print(str(err), file=sys.stderr)
		return 2
	except GoliteError as err:
		_report(err, args.json, default_file)
		return 1
	except OSError as err:
		# Unreadable source paths get the same diagnostic shape.
		_report(GoliteError(f"cannot read source: {err}"), args.json, default_file)
		return 1
	return 0


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())

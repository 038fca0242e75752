# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from cxxmods.aggregate import AggregateOptions, aggregate_v0
from cxxmods.dialect import Dialect
from cxxmods.errors import ModmapError
from cxxmods.modmap import ModmapOptions, modmap_v0

LOG_LEVEL_ENV = "CXXMODS_LOG_LEVEL"

_HANDLER = logging.StreamHandler()
_HANDLER.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))


def _add_agg_ddi_args(p: argparse.ArgumentParser) -> None:
	p.add_argument(
		"-m",
		"--cpp20modules-info",
		dest="registries",
		type=Path,
		action="append",
		default=[],
		help="CXXModules.json registry to merge (repeatable; merged after all .ddi files)",
	)
	p.add_argument(
		"-d",
		"--ddi",
		dest="ddis",
		type=Path,
		action="append",
		default=[],
		help="Module dependency descriptor (.ddi) to fold in (repeatable)",
	)
	p.add_argument("-o", "--output", type=Path, required=True, help="Output path (usually ends with .CXXModules.json)")
	p.add_argument(
		"--strict",
		action="store_true",
		help="Fail when two inputs map the same module name to different paths",
	)


def _add_gen_modmap_args(p: argparse.ArgumentParser) -> None:
	p.add_argument("-c", "--compiler", required=True, help="Compiler flag syntax: clang, gcc or msvc")
	p.add_argument("-m", "--cpp20modules-info", dest="registry", type=Path, required=True, help="CXXModules.json registry")
	p.add_argument("-d", "--ddi", type=Path, required=True, help="Module dependency descriptor (.ddi) of the unit")
	p.add_argument("-o", "--output", type=Path, required=True, help="Output path (usually ends with .modmap)")


def _add_common_args(p: argparse.ArgumentParser) -> None:
	p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)")
	p.add_argument("--json", action="store_true", help="Report errors as a JSON object on stderr")


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="cxxmods", description="C++20 module metadata tooling")
	sub = p.add_subparsers(dest="cmd", required=True)

	agg = sub.add_parser(
		"agg-ddi",
		help="Aggregate .ddi files and CXXModules.json registries into one CXXModules.json",
	)
	_add_agg_ddi_args(agg)
	_add_common_args(agg)

	gen = sub.add_parser("gen-modmap", help="Generate a .modmap file for the specified compiler")
	_add_gen_modmap_args(gen)
	_add_common_args(gen)
	return p


def _configure_logging(verbose: int) -> None:
	level_name = os.environ.get(LOG_LEVEL_ENV)
	if level_name:
		level = logging.getLevelName(level_name.strip().upper())
		if not isinstance(level, int):
			level = logging.WARNING
	elif verbose >= 2:
		level = logging.DEBUG
	elif verbose == 1:
		level = logging.INFO
	else:
		level = logging.WARNING
	logger = logging.getLogger("cxxmods")
	if _HANDLER not in logger.handlers:
		logger.addHandler(_HANDLER)
	# Follow the current stderr; main() may run many times in one process.
	_HANDLER.setStream(sys.stderr)
	logger.setLevel(level)


def _report_error(err: ModmapError, *, as_json: bool) -> None:
	if as_json:
		print(json.dumps(err.to_dict(), sort_keys=True, separators=(",", ":")), file=sys.stderr)
	else:
		print(err.format_human(), file=sys.stderr)


def _run(args: argparse.Namespace) -> int:
	_configure_logging(args.verbose)
	try:
		if args.cmd == "agg-ddi":
			aggregate_v0(
				AggregateOptions(
					output_path=args.output,
					ddi_paths=list(args.ddis),
					registry_paths=list(args.registries),
					strict=bool(args.strict),
				)
			)
			return 0

		if args.cmd == "gen-modmap":
			# Reject bad compiler names before any file is touched.
			dialect = Dialect.parse(args.compiler)
			modmap_v0(
				ModmapOptions(
					dialect=dialect,
					registry_path=args.registry,
					ddi_path=args.ddi,
					output_path=args.output,
				)
			)
			return 0
	except ModmapError as err:
		_report_error(err, as_json=bool(args.json))
		return 2

	raise AssertionError("unreachable")


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	return _run(p.parse_args(argv))


def agg_ddi_main(argv: list[str] | None = None) -> int:
	p = argparse.ArgumentParser(
		prog="agg-ddi",
		description="Aggregate module dependency information files (.ddi) and module information files "
		"(CXXModules.json) into a .CXXModules.json file.",
	)
	_add_agg_ddi_args(p)
	_add_common_args(p)
	p.set_defaults(cmd="agg-ddi")
	return _run(p.parse_args(argv))


def gen_modmap_main(argv: list[str] | None = None) -> int:
	p = argparse.ArgumentParser(prog="gen-modmap", description="Generate .modmap file for the specified compiler")
	_add_gen_modmap_args(p)
	_add_common_args(p)
	p.set_defaults(cmd="gen-modmap")
	return _run(p.parse_args(argv))

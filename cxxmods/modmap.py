# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module map generation (`gen-modmap`).

A module map is the list of extra compiler arguments one translation unit
needs: where to write its own BMI and where to find the BMI of every module
it imports.

Only the first rule that provides a module is considered; a descriptor is
expected to describe a single primary compilation output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cxxmods.ddi_v0 import Ddi
from cxxmods.dialect import Dialect
from cxxmods.errors import ModmapError
from cxxmods.jsonio import load_ddi, load_registry, write_text_atomic
from cxxmods.registry_v0 import Cpp20ModulesInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModmapOptions:
	dialect: Dialect
	registry_path: Path
	ddi_path: Path
	output_path: Path


def generate_modmap(dialect: Dialect, info: Cpp20ModulesInfo, ddi: Ddi) -> str:
	lines: list[str] = []

	rule = next((r for r in ddi.rules if r.provides), None)
	if rule is None:
		return ""

	provided = rule.provides[0].logical_name
	module = info.modules.get(provided)
	if module is not None:
		lines.extend(dialect.module_output_lines(module.bmi))
	else:
		# Not an error: the unit still gets its import mappings.
		logger.debug("provided module '%s' is not in the registry; no output declaration", provided)

	for require in rule.requires:
		ref = info.references.get(require.logical_name)
		if ref is None:
			raise ModmapError(
				reason_code="MISSING_REFERENCE",
				message=f"Reference for required module '{require.logical_name}' not found",
				logical_name=require.logical_name,
			)
		lines.append(dialect.module_file_line(require.logical_name, ref.path))

	return "".join(f"{line}\n" for line in lines)


def modmap_v0(opts: ModmapOptions) -> str:
	info = load_registry(opts.registry_path)
	ddi = load_ddi(opts.ddi_path)
	text = generate_modmap(opts.dialect, info, ddi)
	write_text_atomic(opts.output_path, text)
	logger.info("wrote %s (%d line(s))", opts.output_path, text.count("\n"))
	return text

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Registry aggregation (`agg-ddi`).

Descriptors are folded into registry fragments and merged, in order, into one
whole-program registry. Merging is last-write-wins: a later input silently
replaces an earlier entry with the same logical name unless strict mode is on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, TypeVar

from cxxmods.ddi_v0 import Ddi
from cxxmods.errors import ModmapError
from cxxmods.jsonio import load_ddi, load_registry, save_registry
from cxxmods.registry_v0 import LOOKUP_BY_NAME, Cpp20ModulesInfo, Module, Reference

logger = logging.getLogger(__name__)

_V = TypeVar("_V", Module, Reference)


@dataclass(frozen=True)
class AggregateOptions:
	output_path: Path
	ddi_paths: list[Path] = field(default_factory=list)
	registry_paths: list[Path] = field(default_factory=list)
	strict: bool = False


def fold_ddi(ddi: Ddi) -> Cpp20ModulesInfo:
	"""
	Turn one descriptor into a registry fragment.

	Every provided module gets a module entry and a same-path reference keyed by
	its logical name. Requires contribute nothing here; they are resolved later
	against the combined registry.
	"""
	info = Cpp20ModulesInfo()
	for rule in ddi.rules:
		for provide in rule.provides:
			info.modules[provide.logical_name] = Module(bmi=rule.primary_output, is_private=not provide.is_interface)
			info.references[provide.logical_name] = Reference(path=rule.primary_output, lookup_method=LOOKUP_BY_NAME)
	return info


def _merge_entries(base: dict[str, _V], incoming: Mapping[str, _V], *, what: str, strict: bool) -> None:
	for name, value in incoming.items():
		prev = base.get(name)
		if prev is not None and prev != value:
			if strict:
				raise ModmapError(
					reason_code="MODULE_CONFLICT",
					message=f"conflicting {what} entries for '{name}': {prev} != {value}",
					logical_name=name,
				)
			logger.debug("%s entry '%s' overwritten: %s -> %s", what, name, prev, value)
		base[name] = value


def merge_registry(base: Cpp20ModulesInfo, incoming: Cpp20ModulesInfo, *, strict: bool = False) -> Cpp20ModulesInfo:
	"""
	Merge `incoming` into `base` in place and return `base`.

	Operand order matters: entries of `incoming` replace entries of `base` with
	the same name. `usages` of `base` are left untouched.
	"""
	_merge_entries(base.modules, incoming.modules, what="module", strict=strict)
	_merge_entries(base.references, incoming.references, what="reference", strict=strict)
	return base


def aggregate_v0(opts: AggregateOptions) -> Cpp20ModulesInfo:
	"""
	Fold every descriptor, then merge every registry, and write the result.

	Descriptors are processed before registries, each group in the order given.
	Nothing is written if any input fails to load or (in strict mode) conflicts.
	"""
	info = Cpp20ModulesInfo()

	for path in opts.ddi_paths:
		fragment = fold_ddi(load_ddi(path))
		logger.debug("ddi %s provides %d module(s)", path, len(fragment.modules))
		merge_registry(info, fragment, strict=opts.strict)

	for path in opts.registry_paths:
		other = load_registry(path)
		logger.debug("registry %s carries %d module(s), %d reference(s)", path, len(other.modules), len(other.references))
		merge_registry(info, other, strict=opts.strict)

	save_registry(opts.output_path, info)
	logger.info("wrote %s (%d module(s), %d reference(s))", opts.output_path, len(info.modules), len(info.references))
	return info

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dependency descriptor (.ddi) documents.

One descriptor describes one translation unit: the artifacts it produces,
the module interfaces it provides and the modules it imports. Scanners emit
more fields than we consume; unknown keys are accepted and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Provide:
	logical_name: str
	is_interface: bool
	source_path: str


@dataclass(frozen=True)
class Require:
	logical_name: str


@dataclass(frozen=True)
class Rule:
	primary_output: str
	provides: list[Provide] = field(default_factory=list)
	requires: list[Require] = field(default_factory=list)


@dataclass(frozen=True)
class Ddi:
	revision: int
	version: int
	rules: list[Rule] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		return {
			"revision": self.revision,
			"rules": [
				{
					"primary-output": r.primary_output,
					"provides": [
						{
							"is-interface": p.is_interface,
							"logical-name": p.logical_name,
							"source-path": p.source_path,
						}
						for p in r.provides
					],
					"requires": [{"logical-name": q.logical_name} for q in r.requires],
				}
				for r in self.rules
			],
			"version": self.version,
		}


def _require_str(raw: Mapping[str, Any], key: str, *, where: str) -> str:
	val = raw.get(key)
	if not isinstance(val, str):
		raise ValueError(f"{where} field '{key}' must be a string")
	return val


def _require_bool(raw: Mapping[str, Any], key: str, *, where: str) -> bool:
	val = raw.get(key)
	if not isinstance(val, bool):
		raise ValueError(f"{where} field '{key}' must be a boolean")
	return val


def _require_int(raw: Mapping[str, Any], key: str, *, where: str) -> int:
	val = raw.get(key)
	# bool is an int subclass; reject it explicitly.
	if isinstance(val, bool) or not isinstance(val, int):
		raise ValueError(f"{where} field '{key}' must be an integer")
	return val


def _optional_list(raw: Mapping[str, Any], key: str, *, where: str) -> list[Any]:
	val = raw.get(key)
	if val is None:
		return []
	if not isinstance(val, list):
		raise ValueError(f"{where} field '{key}' must be an array")
	return val


def _rule_from_obj(raw: Any, idx: int) -> Rule:
	where = f"rules[{idx}]"
	if not isinstance(raw, dict):
		raise ValueError(f"{where} must be an object")
	provides: list[Provide] = []
	for j, p in enumerate(_optional_list(raw, "provides", where=where)):
		pwhere = f"{where}.provides[{j}]"
		if not isinstance(p, dict):
			raise ValueError(f"{pwhere} must be an object")
		provides.append(
			Provide(
				logical_name=_require_str(p, "logical-name", where=pwhere),
				is_interface=_require_bool(p, "is-interface", where=pwhere),
				source_path=_require_str(p, "source-path", where=pwhere),
			)
		)
	requires: list[Require] = []
	for j, q in enumerate(_optional_list(raw, "requires", where=where)):
		qwhere = f"{where}.requires[{j}]"
		if not isinstance(q, dict):
			raise ValueError(f"{qwhere} must be an object")
		requires.append(Require(logical_name=_require_str(q, "logical-name", where=qwhere)))
	return Rule(
		primary_output=_require_str(raw, "primary-output", where=where),
		provides=provides,
		requires=requires,
	)


def ddi_from_obj(data: Any) -> Ddi:
	"""
	Build a `Ddi` from decoded JSON, raising `ValueError` on shape violations.
	"""
	if not isinstance(data, dict):
		raise ValueError("ddi must be a JSON object")
	rules_raw = data.get("rules")
	if not isinstance(rules_raw, list):
		raise ValueError("ddi field 'rules' must be an array")
	return Ddi(
		revision=_require_int(data, "revision", where="ddi"),
		version=_require_int(data, "version", where="ddi"),
		rules=[_rule_from_obj(r, i) for i, r in enumerate(rules_raw)],
	)

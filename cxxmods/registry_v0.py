# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Whole-program module registry (CXXModules.json).

The registry maps logical module names to the BMI that holds their compiled
interface (`modules`) and to the path other units should import them from
(`references`). `usages` is carried through for schema compatibility only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LOOKUP_BY_NAME = "by-name"


@dataclass(frozen=True)
class Module:
	bmi: str
	is_private: bool


@dataclass(frozen=True)
class Reference:
	path: str
	lookup_method: str = LOOKUP_BY_NAME


@dataclass
class Cpp20ModulesInfo:
	modules: dict[str, Module] = field(default_factory=dict)
	references: dict[str, Reference] = field(default_factory=dict)
	usages: dict[str, list[str]] = field(default_factory=dict)

	def to_dict(self) -> dict[str, Any]:
		return {
			"modules": {name: {"bmi": m.bmi, "is-private": m.is_private} for name, m in self.modules.items()},
			"references": {
				name: {"lookup-method": r.lookup_method, "path": r.path} for name, r in self.references.items()
			},
			"usages": {name: list(users) for name, users in self.usages.items()},
		}


def _require_object(data: dict[str, Any], key: str) -> dict[str, Any]:
	val = data.get(key)
	if not isinstance(val, dict):
		raise ValueError(f"registry field '{key}' must be an object")
	return val


def registry_from_obj(data: Any) -> Cpp20ModulesInfo:
	"""
	Build a registry from decoded JSON, raising `ValueError` on shape violations.
	"""
	if not isinstance(data, dict):
		raise ValueError("registry must be a JSON object")

	modules: dict[str, Module] = {}
	for name, raw in _require_object(data, "modules").items():
		if not isinstance(raw, dict):
			raise ValueError(f"modules entry '{name}' must be an object")
		bmi = raw.get("bmi")
		is_private = raw.get("is-private")
		if not isinstance(bmi, str):
			raise ValueError(f"modules entry '{name}' field 'bmi' must be a string")
		if not isinstance(is_private, bool):
			raise ValueError(f"modules entry '{name}' field 'is-private' must be a boolean")
		modules[name] = Module(bmi=bmi, is_private=is_private)

	references: dict[str, Reference] = {}
	for name, raw in _require_object(data, "references").items():
		if not isinstance(raw, dict):
			raise ValueError(f"references entry '{name}' must be an object")
		method = raw.get("lookup-method")
		path = raw.get("path")
		if not isinstance(method, str):
			raise ValueError(f"references entry '{name}' field 'lookup-method' must be a string")
		if not isinstance(path, str):
			raise ValueError(f"references entry '{name}' field 'path' must be a string")
		references[name] = Reference(path=path, lookup_method=method)

	usages: dict[str, list[str]] = {}
	for name, raw in _require_object(data, "usages").items():
		if not isinstance(raw, list) or any(not isinstance(u, str) for u in raw):
			raise ValueError(f"usages entry '{name}' must be a list of strings")
		usages[name] = list(raw)

	return Cpp20ModulesInfo(modules=modules, references=references, usages=usages)

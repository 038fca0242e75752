# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from cxxmods.ddi_v0 import Ddi, ddi_from_obj
from cxxmods.errors import ModmapError
from cxxmods.registry_v0 import Cpp20ModulesInfo, registry_from_obj


def _load_json(path: Path) -> Any:
	try:
		text = path.read_text(encoding="utf-8")
	except UnicodeDecodeError as err:
		raise ModmapError(reason_code="JSON_INVALID", message=f"invalid JSON: {err}", path=str(path)) from err
	except OSError as err:
		raise ModmapError(reason_code="IO_ERROR", message=f"cannot read file: {err}", path=str(path)) from err
	try:
		return json.loads(text)
	except json.JSONDecodeError as err:
		raise ModmapError(reason_code="JSON_INVALID", message=f"invalid JSON: {err}", path=str(path)) from err


def load_ddi(path: Path) -> Ddi:
	data = _load_json(path)
	try:
		return ddi_from_obj(data)
	except ValueError as err:
		raise ModmapError(reason_code="SCHEMA_INVALID", message=str(err), path=str(path)) from err


def load_registry(path: Path) -> Cpp20ModulesInfo:
	data = _load_json(path)
	try:
		return registry_from_obj(data)
	except ValueError as err:
		raise ModmapError(reason_code="SCHEMA_INVALID", message=str(err), path=str(path)) from err


def write_text_atomic(path: Path, text: str) -> None:
	"""
	Write `text` to `path` via a temporary sibling so readers never see a torn file.
	"""
	tmp = path.with_name(path.name + f".tmp.{os.getpid()}")
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		tmp.write_text(text, encoding="utf-8")
		os.replace(tmp, path)
	except OSError as err:
		tmp.unlink(missing_ok=True)
		raise ModmapError(reason_code="IO_ERROR", message=f"cannot write file: {err}", path=str(path)) from err


def save_registry(path: Path, info: Cpp20ModulesInfo) -> None:
	write_text_atomic(path, json.dumps(info.to_dict(), indent=2) + "\n")

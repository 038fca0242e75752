# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ModmapError(Exception):
	"""
	A structured, serializable error for the module-map tooling.

	`reason_code` is stable and machine-checkable; `message` is for humans.
	"""

	reason_code: str
	message: str
	path: str | None = None
	logical_name: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
			"logical_name": self.logical_name,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		if self.logical_name:
			parts.append(f"logical_name={self.logical_name}")
		return " ".join(parts)

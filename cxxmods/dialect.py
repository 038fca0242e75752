# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from enum import Enum

from cxxmods.errors import ModmapError


class Dialect(Enum):
	"""Compiler flag syntax family used in generated module maps."""

	CLANG = "clang"
	GCC = "gcc"
	MSVC = "msvc"

	@classmethod
	def parse(cls, name: str) -> "Dialect":
		key = name.lower()
		for d in cls:
			if d.value == key:
				return d
		raise ModmapError(reason_code="UNKNOWN_DIALECT", message=f"Unsupported compiler: {name}")

	@property
	def is_gnu_style(self) -> bool:
		# GCC accepts the same module flags as Clang for our purposes.
		return self is not Dialect.MSVC

	def module_output_lines(self, bmi: str) -> list[str]:
		if self.is_gnu_style:
			return ["-x c++-module", f"-fmodule-output={bmi}"]
		return [f"/module:output {bmi}"]

	def module_file_line(self, logical_name: str, path: str) -> str:
		if self.is_gnu_style:
			return f"-fmodule-file={logical_name}={path}"
		return f"/module:reference {logical_name}={path}"

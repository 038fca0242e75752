# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from cxxmods.ddi_v0 import Ddi, Provide, Require, Rule
from cxxmods.dialect import Dialect
from cxxmods.errors import ModmapError
from cxxmods.modmap import generate_modmap
from cxxmods.registry_v0 import Cpp20ModulesInfo, Module, Reference


def _sample_info() -> Cpp20ModulesInfo:
	return Cpp20ModulesInfo(
		modules={"bar": Module(bmi="cmake-build-debug/CMakeFiles/bar.dir/bar.pcm", is_private=False)},
		references={
			"bar": Reference(path="CMakeFiles/bar.dir/bar.pcm"),
			"foo": Reference(path="CMakeFiles/foo.dir/foo.pcm"),
		},
	)


def _sample_ddi() -> Ddi:
	return Ddi(
		revision=0,
		version=1,
		rules=[
			Rule(
				primary_output="CMakeFiles/bar.dir/bar.cpp.o",
				provides=[Provide(logical_name="bar", is_interface=True, source_path="demo/bar.cpp")],
				requires=[Require(logical_name="foo")],
			)
		],
	)


@pytest.mark.parametrize("dialect", [Dialect.CLANG, Dialect.GCC])
def test_generate_modmap_gnu_style(dialect: Dialect) -> None:
	text = generate_modmap(dialect, _sample_info(), _sample_ddi())
	assert text == (
		"-x c++-module\n"
		"-fmodule-output=cmake-build-debug/CMakeFiles/bar.dir/bar.pcm\n"
		"-fmodule-file=foo=CMakeFiles/foo.dir/foo.pcm\n"
	)


def test_generate_modmap_msvc() -> None:
	text = generate_modmap(Dialect.MSVC, _sample_info(), _sample_ddi())
	assert text == (
		"/module:output cmake-build-debug/CMakeFiles/bar.dir/bar.pcm\n"
		"/module:reference foo=CMakeFiles/foo.dir/foo.pcm\n"
	)


def test_generate_modmap_missing_reference() -> None:
	info = _sample_info()
	del info.references["foo"]

	with pytest.raises(ModmapError) as excinfo:
		generate_modmap(Dialect.CLANG, info, _sample_ddi())

	assert excinfo.value.reason_code == "MISSING_REFERENCE"
	assert excinfo.value.logical_name == "foo"
	assert "'foo'" in excinfo.value.message


def test_generate_modmap_no_provides_is_empty() -> None:
	ddi = Ddi(revision=0, version=1, rules=[Rule(primary_output="main.o", requires=[Require("missing")])])
	assert generate_modmap(Dialect.CLANG, _sample_info(), ddi) == ""
	assert generate_modmap(Dialect.MSVC, Cpp20ModulesInfo(), Ddi(revision=0, version=1)) == ""


def test_generate_modmap_missing_own_module_still_maps_requires() -> None:
	info = _sample_info()
	del info.modules["bar"]

	text = generate_modmap(Dialect.CLANG, info, _sample_ddi())

	assert text == "-fmodule-file=foo=CMakeFiles/foo.dir/foo.pcm\n"


def test_generate_modmap_only_first_providing_rule() -> None:
	ddi = Ddi(
		revision=0,
		version=1,
		rules=[
			Rule(primary_output="main.o", requires=[Require("nowhere")]),
			Rule(primary_output="bar.o", provides=[Provide("bar", True, "bar.cppm")], requires=[Require("foo")]),
			Rule(primary_output="baz.o", provides=[Provide("baz", True, "baz.cppm")], requires=[Require("nowhere")]),
		],
	)

	text = generate_modmap(Dialect.MSVC, _sample_info(), ddi)

	assert text.splitlines() == [
		"/module:output cmake-build-debug/CMakeFiles/bar.dir/bar.pcm",
		"/module:reference foo=CMakeFiles/foo.dir/foo.pcm",
	]


def test_generate_modmap_requires_follow_descriptor_order() -> None:
	info = Cpp20ModulesInfo(
		modules={"app": Module(bmi="app.pcm", is_private=False)},
		references={n: Reference(path=f"{n}.pcm") for n in ("a", "b", "c")},
	)
	ddi = Ddi(
		revision=0,
		version=1,
		rules=[
			Rule(
				primary_output="app.o",
				provides=[Provide("app", True, "app.cppm")],
				requires=[Require("c"), Require("a"), Require("b")],
			)
		],
	)

	lines = generate_modmap(Dialect.GCC, info, ddi).splitlines()

	assert lines[2:] == ["-fmodule-file=c=c.pcm", "-fmodule-file=a=a.pcm", "-fmodule-file=b=b.pcm"]

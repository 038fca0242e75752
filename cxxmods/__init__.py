# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
cxxmods: C++20 module metadata tooling.

Commands:
  agg-ddi:    fold .ddi descriptors and CXXModules.json registries into one registry
  gen-modmap: resolve one .ddi against a registry into compiler module-map arguments
"""

__all__ = ["aggregate", "ddi_v0", "dialect", "errors", "modmap", "registry_v0"]

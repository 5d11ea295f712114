# tests/unit/test_extensions.py
"""
Tests for contract extensions and extension target resolution.
"""

from __future__ import annotations

import sys
from types import ModuleType

import pytest

from modelgen.build import ComponentDescriptor
from modelgen.contracts import ModelNodeEnabled
from modelgen.exceptions import ExtensionResolutionFailure
from modelgen.extensions import ContractExtender, ExtensionRegistry, resolve_contract_type
from modelgen.markers import ClassName
from sample_components import GridOptions, GridView


@ClassName("app.components.Baz")
class IModelBaz(ModelNodeEnabled):
    pass


@ClassName("app.components.Bar")
class IModelBar(ModelNodeEnabled):
    pass


@ClassName("app.grid.Bar")
class IModelGridBar(ModelNodeEnabled):
    pass


@pytest.fixture
def contracts_module() -> ModuleType:
    module = ModuleType("extension_contracts")
    for cls in (IModelBaz, IModelBar, IModelGridBar):
        setattr(module, cls.__name__, cls)
    return module


@pytest.fixture
def registry() -> ExtensionRegistry:
    return ExtensionRegistry()


class TestResolve:
    def test_contract_resolves_to_itself(self, contracts_module):
        assert resolve_contract_type(IModelBaz, contracts_module) is IModelBaz

    def test_by_name(self, contracts_module):
        assert resolve_contract_type("Baz", contracts_module) is IModelBaz
        assert resolve_contract_type("app.components.Baz", contracts_module) is IModelBaz

    def test_missing_contract(self, contracts_module):
        with pytest.raises(ExtensionResolutionFailure) as exc_info:
            resolve_contract_type("Qux", contracts_module)
        assert exc_info.value.type_name == "Qux"
        assert "Qux" in str(exc_info.value)

    def test_ambiguous_contract(self, contracts_module):
        with pytest.raises(ExtensionResolutionFailure, match="Ambiguous") as exc_info:
            resolve_contract_type("Bar", contracts_module)
        assert "IModelBar, IModelGridBar" in str(exc_info.value)


class TestExtender:
    def test_generated_module(self, design_builder, output_path):
        module = design_builder.build([ComponentDescriptor(GridView)], output_path).module
        try:
            registry = ExtensionRegistry()
            target, extension = ContractExtender(registry).extend(GridView, GridOptions, module)

            assert target is module.IModelAppGridView
            assert extension is module.IModelAppGridViewAppGridOptions
            assert registry.get(target) == [extension]
        finally:
            sys.modules.pop("modelgen_generated_App", None)

    def test_order_and_duplicates_kept(self, registry, contracts_module):
        extender = ContractExtender(registry)
        extender.extend("Baz", IModelBar, contracts_module)
        extender.extend("Baz", IModelGridBar, contracts_module)
        extender.extend(IModelBaz, IModelBar, contracts_module)

        assert registry.get(IModelBaz) == [IModelBar, IModelGridBar, IModelBar]
        assert IModelBaz in registry
        assert len(registry) == 1
        assert registry.targets() == [IModelBaz]

    def test_failed_resolution_registers_nothing(self, registry, contracts_module):
        with pytest.raises(ExtensionResolutionFailure):
            ContractExtender(registry).extend("Baz", "Qux", contracts_module)
        assert len(registry) == 0

    def test_get_returns_copy(self, registry):
        registry.add(IModelBaz, IModelBar)
        registry.get(IModelBaz).append(IModelGridBar)
        assert registry.items() == [(IModelBaz, [IModelBar])]

    def test_unknown_target(self, registry):
        assert registry.get(IModelBaz) == []

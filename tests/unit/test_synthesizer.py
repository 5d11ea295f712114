# tests/unit/test_synthesizer.py
"""
Tests for contract synthesis: naming, memoization, cycles and members.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

import pytest

from modelgen.build.types import ComponentDescriptor
from modelgen.contracts import ModelNode
from modelgen.exceptions import ContractNameConflict
from modelgen.markers import NullValue
from modelgen.synth import ContractSynthesizer
from sample_components import (
    AddressInfo,
    Canvas,
    Car,
    Engine,
    ExistingContract,
    Namesake,
    Painter,
    Person,
    TreeNode,
    Truck,
    Widget,
)


class Meter:
    Reading: Annotated[int, NullValue()]
    Offset: int


@pytest.fixture
def synth() -> ContractSynthesizer:
    return ContractSynthesizer("App", version="1.0.0-test")


# =============================================================================
# Naming And Arena
# =============================================================================


class TestNaming:
    """Generated names and one-contract-per-class."""

    def test_top_level_and_nested_names(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert [c.name for c in ir.contracts] == ["IModelAppPerson", "IModelAppPersonAppAddressInfo"]
        assert ir.contract("IModelAppPerson").member("Address").type_ref == "IModelAppPersonAppAddressInfo"

    def test_custom_prefix(self):
        synth = ContractSynthesizer("Web", name_prefix="IView")
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert [c.name for c in ir.contracts] == ["IViewWebPerson", "IViewWebPersonWebAddressInfo"]

    def test_names_are_unique(self, synth):
        ir = synth.synthesize(
            [ComponentDescriptor(Person), ComponentDescriptor(Car), ComponentDescriptor(Truck)]
        )
        names = [c.name for c in ir.contracts]
        assert len(names) == len(set(names))

    def test_shared_nested_type_is_synthesized_once(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Car), ComponentDescriptor(Truck)])
        engines = [c for c in ir.contracts if c.backing_type is Engine]
        assert len(engines) == 1
        assert ir.contract("IModelAppTruck").member("Motor").type_ref == engines[0].name == "IModelAppCarAppEngine"

    def test_top_level_type_already_in_arena_is_skipped(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person), ComponentDescriptor(AddressInfo)])
        assert len(ir.contracts) == 2
        assert synth.get(AddressInfo).name == "IModelAppPersonAppAddressInfo"
        assert AddressInfo in synth

    def test_self_reference(self, synth):
        ir = synth.synthesize([ComponentDescriptor(TreeNode)])
        assert len(ir.contracts) == 1
        assert ir.contracts[0].member("Parent").type_ref == "IModelAppTreeNode"

    def test_mutual_reference(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Painter), ComponentDescriptor(Canvas)])
        assert [c.name for c in ir.contracts] == ["IModelAppPainter", "IModelAppPainterAppCanvas"]
        canvas = ir.by_backing_type()[Canvas]
        assert canvas.member("Owner").type_ref == "IModelAppPainter"

    def test_generated_names_are_reserved(self, synth):
        synth.synthesize([ComponentDescriptor(Person)])
        assert synth.collector.is_reserved("IModelAppPerson")

    def test_same_name_from_another_scope_conflicts(self, synth):
        with pytest.raises(ContractNameConflict) as exc_info:
            synth.synthesize([ComponentDescriptor(Person), ComponentDescriptor(Namesake.Person)])
        assert exc_info.value.name == "IModelAppPerson"
        assert exc_info.value.first is Person
        assert exc_info.value.second is Namesake.Person



# =============================================================================
# Bases And Headers
# =============================================================================


class TestBases:
    def test_default_base(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert all(c.base_ref == "ModelNodeEnabled" for c in ir.contracts)

    def test_root_base_applies_to_top_level_only(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person, root_base_contract=ExistingContract)])
        person, address = ir.contracts
        assert person.base_ref == "ExistingContract"
        assert address.base_ref == "ModelNodeEnabled"
        assert address.nested and not person.nested

    def test_nested_uses_base_contract(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person, base_contract=ModelNode)])
        assert [c.base_ref for c in ir.contracts] == ["ModelNode", "ModelNode"]

    def test_identity_header(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert ir.contracts[0].header == ['@ClassName("sample_components.Person")']

    def test_abstract_header(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person, is_abstract=True)])
        person, address = ir.contracts
        assert person.is_abstract
        assert person.header[-1] == "@ModelAbstractClass()"
        assert not address.is_abstract


# =============================================================================
# Members
# =============================================================================


class TestMembers:
    def test_widget_members(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Widget)])
        contract = ir.contracts[0]
        assert contract.member_names == ["Title", "Count", "Ratio", "When", "Price", "Tint", "Scale"]
        assert all(m.writable for m in contract.members)

    def test_value_types_wrapped_in_optional(self, synth):
        contract = synth.synthesize([ComponentDescriptor(Widget)]).contracts[0]
        assert contract.member("Title").type_ref == "str"
        assert contract.member("Count").type_ref == "Optional[int]"
        assert contract.member("Ratio").type_ref == "Optional[float]"
        assert contract.member("Tint").type_ref == "Optional[Color]"

    def test_struct_types_not_wrapped(self, synth):
        contract = synth.synthesize([ComponentDescriptor(Widget)]).contracts[0]
        assert contract.member("When").type_ref == "date"
        assert contract.member("Price").type_ref == "Decimal"

    def test_null_value_keeps_declared_type(self, synth):
        contract = synth.synthesize([ComponentDescriptor(Meter)]).contracts[0]
        assert contract.member("Reading").type_ref == "int"
        assert contract.member("Offset").type_ref == "Optional[int]"

    def test_member_annotations(self, synth):
        contract = synth.synthesize([ComponentDescriptor(Widget)]).contracts[0]
        assert contract.member("Title").annotations == ['Category("Appearance")', "Localizable(True)"]
        assert contract.member("Count").annotations == []
        assert contract.member("Scale").annotations == ['Description("Zoom factor")']

    def test_nested_member_is_read_only(self, synth):
        person = synth.synthesize([ComponentDescriptor(Person)]).contracts[0]
        address = person.member("Address")
        assert address.nested
        assert not address.writable

    def test_property_filter(self, synth):
        ir = synth.synthesize(
            [ComponentDescriptor(Person, property_filter=lambda info: info.name != "Address")]
        )
        assert len(ir.contracts) == 1
        assert ir.contracts[0].member_names == ["Name"]

    def test_reference_types_are_recorded(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person, reference_types=[Decimal])])
        assert "decimal" in ir.references

    def test_build_ir(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert ir.stem == "App"
        assert ir.version == "1.0.0-test"
        assert ir.annotated_ref == "Annotated"
        assert "from typing import Annotated" in ir.import_lines
        assert {"sample_components", "modelgen.contracts", "modelgen.markers", "typing"} <= set(ir.references)

    def test_component_module_is_referenced(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Meter)])
        assert __name__ in ir.references
        assert f"from {__name__} import Meter" in ir.import_lines

    def test_backing_class_is_imported(self, synth):
        ir = synth.synthesize([ComponentDescriptor(Person)])
        assert "from sample_components import AddressInfo, Person" in ir.import_lines


# =============================================================================
# Snippets
# =============================================================================


class TestSnippets:
    def test_empty_contracts(self, synth):
        code = synth.generated_empty_contracts_code([Person, Car], ModelNode)
        assert code == (
            "class IModelPerson(ModelNode):\n"
            "    pass\n"
            "\n"
            "\n"
            "class IModelCar(ModelNode):\n"
            "    pass"
        )

    def test_empty_contracts_with_header(self, synth):
        code = synth.generated_empty_contracts_code(
            [Person],
            ModelNode,
            header=lambda tp, base, name: synth.generated_display_name_code(tp.__name__),
        )
        assert code.splitlines() == [
            '@ModelDisplayName("Person")',
            "class IModelPerson(ModelNode):",
            "    pass",
        ]

    def test_no_types(self, synth):
        assert synth.generated_empty_contracts_code([], ModelNode) == ""

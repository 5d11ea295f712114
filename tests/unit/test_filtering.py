# tests/unit/test_filtering.py
"""
Tests for the stock property filter and the descriptor helpers.
"""

from __future__ import annotations

import pytest

from modelgen.filtering import (
    PropertyFilter,
    create_value_calculator,
    filter_attributes,
    filter_property,
    hide_value_calculator,
    set_browsable,
    set_category,
    set_default_values,
)
from modelgen.markers import (
    Browsable,
    Category,
    DefaultValue,
    ModelValueCalculatorWrapper,
    ReadOnly,
    Required,
    Serializable,
)
from modelgen.reflection import PropertyDescriptor, candidate_properties
from sample_components import AddressInfo, GridOptions, GridView, Widget


class GridViewEx(GridView):
    """Derived view: properties declared here still count as base-view properties."""


class CustomOptions:
    """Option group that does not derive from BaseOptions."""


class TotalCalculator:
    pass


def make_info(name="Value", property_type=bool, declaring_type=GridView, attributes=None, can_write=True):
    if attributes is None:
        attributes = [Serializable()]
    return PropertyDescriptor(name, property_type, declaring_type, True, can_write, attributes)


# =============================================================================
# Filter Asymmetry
# =============================================================================


class TestFilterAsymmetry:
    """The eligibility rule depends on where the property is declared."""

    def test_base_view_accepts_value_types(self):
        assert filter_property(make_info(property_type=str), GridView) is True

    def test_base_view_accepts_option_types(self):
        info = make_info(property_type=GridOptions, can_write=False)
        assert filter_property(info, GridView) is True

    def test_base_view_rejects_other_reference_types(self):
        info = make_info(property_type=AddressInfo, can_write=False)
        assert filter_property(info, GridView) is False

    def test_derived_view_counts_as_base_view(self):
        info = make_info(property_type=int, declaring_type=GridViewEx)
        assert filter_property(info, GridView) is True

    def test_option_type_requires_value_properties(self):
        assert filter_property(make_info(declaring_type=GridOptions), GridView) is True
        info = make_info(property_type=AddressInfo, declaring_type=GridOptions, can_write=False)
        assert filter_property(info, GridView) is False

    def test_unrelated_declaring_type_is_rejected(self):
        info = make_info(property_type=bool, declaring_type=AddressInfo)
        assert filter_property(info, GridView) is False

    def test_extra_base_types_extend_known_set(self):
        info = make_info(property_type=int, declaring_type=CustomOptions)
        assert filter_property(info, GridView) is False
        assert filter_property(info, GridView, base_types=[CustomOptions]) is True


# =============================================================================
# Other Checks
# =============================================================================


class TestFilterChecks:
    """Browsability, required markers and reserved names."""

    def test_non_browsable_rejected(self):
        info = make_info(attributes=[Serializable(), Browsable(False)])
        assert filter_property(info, GridView) is False

    def test_serializable_required_by_default(self):
        assert filter_property(make_info(attributes=[]), GridView) is False

    def test_required_markers_are_any_of(self):
        info = make_info(attributes=[Required()])
        assert filter_property(info, GridView, required=(Serializable, Required)) is True

    def test_empty_required_disables_check(self):
        assert filter_property(make_info(attributes=[]), GridView, required=()) is True

    def test_reserved_name_rejected(self):
        assert filter_property(make_info(name="IsReadOnly"), GridView) is False

    def test_property_filter_callable(self):
        stock = PropertyFilter(GridView)
        names = [p.name for p in candidate_properties(GridView) if stock(p)]
        assert names == ["Caption", "Options"]

    def test_property_filter_on_options(self):
        stock = PropertyFilter(GridView)
        names = [p.name for p in candidate_properties(GridOptions) if stock(p)]
        assert names == ["ShowFooter"]

    def test_filter_attributes(self):
        info = make_info(attributes=[Category("A")])
        assert filter_attributes(info, [Category]) is True
        assert filter_attributes(info, [Serializable, Required]) is False


# =============================================================================
# Descriptor Helpers
# =============================================================================


class TestDescriptorHelpers:
    """Helpers used inside custom filters to reshape descriptors."""

    def test_set_browsable_replaces_marker(self):
        info = make_info(name="Caption", attributes=[Browsable(True)])
        set_browsable(info, {"Caption": False})
        assert info.get_attributes(Browsable) == [Browsable(False)]

    def test_set_category_ignores_other_names(self):
        info = make_info(name="Caption", attributes=[Category("Old")])
        set_category(info, {"Other": "New"})
        assert info.get_attributes(Category) == [Category("Old")]
        set_category(info, {"Caption": "New"})
        assert info.get_attributes(Category) == [Category("New")]

    def test_set_default_values(self):
        info = make_info(name="Count", property_type=int)
        set_default_values(info, {"Count": 7})
        assert info.get_attributes(DefaultValue) == [DefaultValue(7)]

    def test_create_value_calculator(self):
        info = make_info(name="Total", property_type=int)
        info.add_attribute(DefaultValue(1))
        create_value_calculator(info, TotalCalculator())

        assert not info.has_attribute(DefaultValue)
        assert info.get_attributes(ReadOnly) == [ReadOnly(True)]
        wrapper = info.get_attributes(ModelValueCalculatorWrapper)[0]
        assert wrapper.calculator_type is TotalCalculator

    def test_hide_value_calculator(self):
        info = make_info()
        hide_value_calculator(info)
        assert info.has_attribute(Browsable)
        assert filter_property(info, GridView) is False

    def test_filters_reshape_reflected_widget(self):
        def reshape(info: PropertyDescriptor) -> bool:
            set_category(info, {"Title": "Caption"})
            return info.name in ("Title", "Count")

        kept = [p for p in candidate_properties(Widget) if reshape(p)]
        assert [p.name for p in kept] == ["Title", "Count"]
        assert kept[0].get_attributes(Category) == [Category("Caption")]

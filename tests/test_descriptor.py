"""Tests for the JVM descriptor codec."""

import pytest

from mappings.core.descriptor import (
    is_field_descriptor,
    is_method_descriptor,
    remap_descriptor,
    split_method_descriptor,
    to_descriptor,
    to_internal_name,
    to_method_descriptor,
    to_type_name,
)
from mappings.core.errors import DescriptorError


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("void", "V"),
        ("boolean", "Z"),
        ("byte", "B"),
        ("char", "C"),
        ("short", "S"),
        ("int", "I"),
        ("long", "J"),
        ("float", "F"),
        ("double", "D"),
    ],
)
def test_primitive_table(type_name, expected):
    assert to_descriptor(type_name) == expected


def test_class_reference_uses_internal_name():
    assert (
        to_descriptor("net.minecraft.world.level.Level")
        == "Lnet/minecraft/world/level/Level;"
    )


def test_array_nesting_is_preserved():
    assert to_descriptor("int[][]") == "[[I"
    assert to_descriptor("net.minecraft.Thing[][]") == "[[Lnet/minecraft/Thing;"


def test_primitive_lookalike_is_a_class():
    assert to_descriptor("Integer") == "LInteger;"


def test_method_descriptor_composition():
    assert to_method_descriptor("void", ["int", "foo.Bar"]) == "(ILfoo/Bar;)V"


def test_method_descriptor_keeps_declaration_order():
    assert to_method_descriptor("long", ["foo.Bar", "int"]) == "(Lfoo/Bar;I)J"
    assert to_method_descriptor("int", []) == "()I"


def test_to_internal_name():
    assert to_internal_name("a.b.C$D") == "a/b/C$D"
    assert to_internal_name("abc") == "abc"


# ---------------------------------------------------------------------------
# remap_descriptor
# ---------------------------------------------------------------------------


def test_remap_substitutes_only_mapped_classes():
    assert remap_descriptor("(LA;I)LC;", {"A": "B"}) == "(LB;I)LC;"


@pytest.mark.parametrize(
    "descriptor",
    ["I", "[[I", "(ILfoo/Bar;)V", "()Ljava/lang/String;", "(LA;[LB;)[[LC;"],
)
def test_remap_with_empty_map_is_identity(descriptor):
    assert remap_descriptor(descriptor, {}) == descriptor


def test_remap_inside_arrays():
    mapping = {"net/minecraft/Thing": "qrs"}
    assert remap_descriptor("([I[Lnet/minecraft/Thing;)V", mapping) == "([I[Lqrs;)V"


def test_remap_multiple_references():
    mapping = {"net/minecraft/Foo": "a", "net/minecraft/Bar": "b"}
    assert (
        remap_descriptor("(Lnet/minecraft/Foo;I)Lnet/minecraft/Bar;", mapping)
        == "(La;I)Lb;"
    )


def test_remap_does_not_touch_letters_inside_class_names():
    # "L" and "I" inside a class name are not tokens.
    mapping = {"Level": "x", "I": "y"}
    assert remap_descriptor("(LLevel;)LList;", mapping) == "(Lx;)LList;"


def test_remap_passes_through_unterminated_reference():
    assert remap_descriptor("(Lfoo/Bar", {"foo/Bar": "a"}) == "(Lfoo/Bar"


def test_remap_preserves_parameter_structure():
    original = "(IJLfoo/Bar;[Z)V"
    remapped = remap_descriptor(original, {"foo/Bar": "zz/Q"})
    assert split_method_descriptor(remapped) == (["I", "J", "Lzz/Q;", "[Z"], "V")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "type_name",
    ["int", "void", "boolean[]", "int[][]", "java.lang.String", "a.B[][]"],
)
def test_to_type_name_inverts_to_descriptor(type_name):
    assert to_type_name(to_descriptor(type_name)) == type_name


@pytest.mark.parametrize("descriptor", ["", "[V", "L;", "Lfoo", "II", "Q", "(I)V"])
def test_to_type_name_rejects_malformed(descriptor):
    with pytest.raises(DescriptorError):
        to_type_name(descriptor)


def test_split_method_descriptor():
    assert split_method_descriptor("(I[Lfoo/Bar;)V") == (["I", "[Lfoo/Bar;"], "V")
    assert split_method_descriptor("()[[J") == ([], "[[J")


@pytest.mark.parametrize("descriptor", ["I", "(I", "(V)V", "(I)", "(I)VV", "(I)LA"])
def test_split_method_descriptor_rejects_malformed(descriptor):
    with pytest.raises(DescriptorError):
        split_method_descriptor(descriptor)


def test_grammar_checks():
    assert is_field_descriptor("[Lfoo/Bar;")
    assert not is_field_descriptor("V")
    assert not is_field_descriptor("()V")
    assert is_method_descriptor("()V")
    assert not is_method_descriptor("I")


def test_descriptor_error_is_a_value_error():
    with pytest.raises(ValueError):
        to_type_name("Q")


# ---------------------------------------------------------------------------
# Deeply nested arrays
# ---------------------------------------------------------------------------

DEEP = 5000


def test_deep_array_encoding():
    assert to_descriptor("int" + "[]" * DEEP) == "[" * DEEP + "I"
    assert to_descriptor("foo.Bar" + "[]" * DEEP) == "[" * DEEP + "Lfoo/Bar;"


def test_deep_array_remap():
    descriptor = "(" + "[" * DEEP + "LA;)" + "[" * DEEP + "I"
    expected = "(" + "[" * DEEP + "LB;)" + "[" * DEEP + "I"
    assert remap_descriptor(descriptor, {"A": "B"}) == expected
    assert remap_descriptor("[" * DEEP, {"A": "B"}) == "[" * DEEP


def test_deep_array_decoding():
    descriptor = "[" * DEEP + "Lfoo/Bar;"
    assert is_field_descriptor(descriptor)
    assert not is_field_descriptor("[" * DEEP)
    assert to_type_name(descriptor) == "foo.Bar" + "[]" * DEEP
    assert split_method_descriptor("(" + descriptor + ")V") == ([descriptor], "V")

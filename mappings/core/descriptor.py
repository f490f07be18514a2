"""
JVM Type Descriptor Codec
==========================

Pure functions converting between Java source type names, as written in
ProGuard mapping files, and JVM type descriptors, as used by the class
file format.

Grammar::

    FieldType   := BaseType | ObjectType | ArrayType
    BaseType    := 'Z' | 'B' | 'C' | 'S' | 'I' | 'J' | 'F' | 'D'
    ObjectType  := 'L' ClassName ';'
    ArrayType   := '[' FieldType
    MethodDesc  := '(' FieldType* ')' ( FieldType | 'V' )

Descriptors are the join key between the deobfuscated and obfuscated
namespaces, so :func:`remap_descriptor` never changes a descriptor's
token structure, only the class names inside ``ObjectType`` tokens.

Examples::

    >>> to_descriptor("int[][]")
    '[[I'
    >>> to_method_descriptor("void", ["int", "foo.Bar"])
    '(ILfoo/Bar;)V'
    >>> remap_descriptor("(LA;I)LC;", {"A": "B"})
    '(LB;I)LC;'

References:
    - Lindholm, T. et al. (2024). The Java Virtual Machine Specification,
      Java SE 21 Edition, section 4.3 "Descriptors".
"""

from __future__ import annotations

from typing import Iterable, Mapping

from mappings.core.errors import DescriptorError


# ---------------------------------------------------------------------------
# Grammar constants
# ---------------------------------------------------------------------------

ARRAY_MARKER: str = "["
CLASS_MARKER: str = "L"
CLASS_TERMINATOR: str = ";"
PARAMS_OPEN: str = "("
PARAMS_CLOSE: str = ")"
ARRAY_SUFFIX: str = "[]"

PRIMITIVE_DESCRIPTORS: dict[str, str] = {
    "void": "V",
    "boolean": "Z",
    "byte": "B",
    "char": "C",
    "short": "S",
    "int": "I",
    "long": "J",
    "float": "F",
    "double": "D",
}

_PRIMITIVE_NAMES: dict[str, str] = {
    code: name for name, code in PRIMITIVE_DESCRIPTORS.items()
}

VOID: str = PRIMITIVE_DESCRIPTORS["void"]


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def to_internal_name(name: str) -> str:
    """Convert a dotted source name to internal form.

    ``"net.minecraft.world.level.Level"`` becomes
    ``"net/minecraft/world/level/Level"``.
    """
    return name.replace(".", "/")


def to_descriptor(type_name: str) -> str:
    """Encode a Java source type name as a field descriptor.

    Each trailing ``[]`` adds one array marker.  Primitive keywords and
    ``void`` use the fixed table; every other name is a class reference.
    """
    end = len(type_name)
    while type_name.endswith(ARRAY_SUFFIX, 0, end):
        end -= len(ARRAY_SUFFIX)
    markers = ARRAY_MARKER * ((len(type_name) - end) // len(ARRAY_SUFFIX))
    element = type_name[:end]

    code = PRIMITIVE_DESCRIPTORS.get(element)
    if code is not None:
        return markers + code
    return markers + CLASS_MARKER + to_internal_name(element) + CLASS_TERMINATOR


def to_method_descriptor(return_type: str, param_types: Iterable[str]) -> str:
    """Build a method descriptor from source type names.

    Parameters are encoded in declaration order, followed by the return
    type: ``("void", ["int", "net.minecraft.Entity"])`` gives
    ``"(ILnet/minecraft/Entity;)V"``.
    """
    params = "".join(to_descriptor(param) for param in param_types)
    return PARAMS_OPEN + params + PARAMS_CLOSE + to_descriptor(return_type)


# ---------------------------------------------------------------------------
# Remapping
# ---------------------------------------------------------------------------

def remap_descriptor(descriptor: str, substitutions: Mapping[str, str]) -> str:
    """Substitute class names inside *descriptor*.

    Class references found in *substitutions* are replaced; unmapped class
    references, primitive codes, array markers and parentheses are copied
    through unchanged.  The scan is total: malformed input is passed
    through rather than rejected.

    Args:
        descriptor:    A field or method descriptor.
        substitutions: Internal class name to internal class name.

    Returns:
        The remapped descriptor, with the same tokens in the same order.
    """
    if not substitutions:
        return descriptor

    parts: list[str] = []
    pos = 0
    while pos < len(descriptor):
        text, pos = _remap_token(descriptor, pos, substitutions)
        parts.append(text)
    return "".join(parts)


def _remap_token(
    descriptor: str, pos: int, substitutions: Mapping[str, str]
) -> tuple[str, int]:
    """Remap the single token starting at *pos*; return it and the next position."""
    char = descriptor[pos]
    if char == ARRAY_MARKER:
        return _remap_array(descriptor, pos, substitutions)
    if char == CLASS_MARKER:
        return _remap_class_reference(descriptor, pos, substitutions)
    return char, pos + 1


def _remap_array(
    descriptor: str, pos: int, substitutions: Mapping[str, str]
) -> tuple[str, int]:
    end = pos
    while end < len(descriptor) and descriptor[end] == ARRAY_MARKER:
        end += 1
    markers = descriptor[pos:end]
    if end >= len(descriptor):
        return markers, end
    element, end = _remap_token(descriptor, end, substitutions)
    return markers + element, end


def _remap_class_reference(
    descriptor: str, pos: int, substitutions: Mapping[str, str]
) -> tuple[str, int]:
    end = descriptor.find(CLASS_TERMINATOR, pos + 1)
    if end == -1:
        # Unterminated reference: copy the remainder verbatim.
        return descriptor[pos:], len(descriptor)
    name = descriptor[pos + 1 : end]
    return CLASS_MARKER + substitutions.get(name, name) + CLASS_TERMINATOR, end + 1


# ---------------------------------------------------------------------------
# Strict decoding
# ---------------------------------------------------------------------------

def _read_field_type(descriptor: str, pos: int) -> int:
    """Consume one FieldType starting at *pos* and return the end position."""
    while pos < len(descriptor) and descriptor[pos] == ARRAY_MARKER:
        pos += 1
    if pos >= len(descriptor):
        raise DescriptorError(f"unexpected end of descriptor {descriptor!r}")
    char = descriptor[pos]
    if char == CLASS_MARKER:
        end = descriptor.find(CLASS_TERMINATOR, pos + 1)
        if end == -1:
            raise DescriptorError(f"unterminated class reference in {descriptor!r}")
        if end == pos + 1:
            raise DescriptorError(f"empty class name in {descriptor!r}")
        return end + 1
    if char in _PRIMITIVE_NAMES and char != VOID:
        return pos + 1
    raise DescriptorError(f"unexpected {char!r} at {pos} in {descriptor!r}")


def split_method_descriptor(descriptor: str) -> tuple[list[str], str]:
    """Split a method descriptor into parameter descriptors and return descriptor.

    ``"(I[Lfoo/Bar;)V"`` gives ``(["I", "[Lfoo/Bar;"], "V")``.

    Raises:
        DescriptorError: If *descriptor* is not a method descriptor.
    """
    if not descriptor.startswith(PARAMS_OPEN):
        raise DescriptorError(f"method descriptor must start with '(': {descriptor!r}")

    params: list[str] = []
    pos = 1
    while pos < len(descriptor) and descriptor[pos] != PARAMS_CLOSE:
        end = _read_field_type(descriptor, pos)
        params.append(descriptor[pos:end])
        pos = end
    if pos >= len(descriptor):
        raise DescriptorError(f"missing ')' in {descriptor!r}")

    returns = descriptor[pos + 1 :]
    if returns != VOID and _read_field_type(descriptor, pos + 1) != len(descriptor):
        raise DescriptorError(f"trailing data after return type in {descriptor!r}")
    return params, returns


def to_type_name(descriptor: str) -> str:
    """Decode a single type descriptor back to its Java source name.

    The inverse of :func:`to_descriptor` for canonical input:
    ``"[[I"`` gives ``"int[][]"`` and ``"Lfoo/Bar;"`` gives ``"foo.Bar"``.

    Raises:
        DescriptorError: If *descriptor* is not exactly one type.
    """
    element = descriptor.lstrip(ARRAY_MARKER)
    dimensions = len(descriptor) - len(element)

    if element == VOID and dimensions == 0:
        return "void"
    if _read_field_type(element, 0) != len(element):
        raise DescriptorError(f"not a single type descriptor: {descriptor!r}")

    if element[0] == CLASS_MARKER:
        name = element[1:-1].replace("/", ".")
    else:
        name = _PRIMITIVE_NAMES[element]
    return name + ARRAY_SUFFIX * dimensions


def is_field_descriptor(descriptor: str) -> bool:
    """Whether *descriptor* is exactly one well-formed FieldType."""
    try:
        return _read_field_type(descriptor, 0) == len(descriptor)
    except DescriptorError:
        return False


def is_method_descriptor(descriptor: str) -> bool:
    """Whether *descriptor* is a well-formed method descriptor."""
    try:
        split_method_descriptor(descriptor)
    except DescriptorError:
        return False
    return True

"""
Mapping Data Models
====================

Immutable Pydantic models for the symbol table produced from a ProGuard
mapping file.  Class names are stored in JVM internal form
(``net/minecraft/world/level/Level``); member descriptors are stored in
the deobfuscated namespace, exactly as the mapping file declares them.

References:
    - ProGuard manual, "Retrace" mapping file format.
      https://www.guardsquare.com/manual/tools/retrace
"""

from __future__ import annotations

import enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mappings.core.descriptor import (
    is_field_descriptor,
    is_method_descriptor,
    to_internal_name,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Namespace(str, enum.Enum):
    """The two parallel identifier spaces of a mapping file."""
    DEOBFUSCATED = "deobfuscated"
    OBFUSCATED = "obfuscated"


class RemapDirection(str, enum.Enum):
    """Which way a descriptor is translated between namespaces."""
    TO_OBFUSCATED = "to_obfuscated"
    TO_DEOBFUSCATED = "to_deobfuscated"


_FROZEN = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

class FieldMapping(BaseModel):
    """A single field mapping.

    Attributes:
        deobfuscated_name: Original field name (e.g. ``health``).
        obfuscated_name: Obfuscated field name (e.g. ``a``).
        descriptor: Field type descriptor in the deobfuscated namespace
            (e.g. ``I`` or ``Lnet/minecraft/world/level/Level;``).
    """
    model_config = _FROZEN

    deobfuscated_name: str = Field(..., min_length=1)
    obfuscated_name: str = Field(..., min_length=1)
    descriptor: str

    @field_validator("descriptor")
    @classmethod
    def _check_descriptor(cls, v: str) -> str:
        if not is_field_descriptor(v):
            raise ValueError(f"malformed field descriptor {v!r}")
        return v


class MethodMapping(BaseModel):
    """A single method mapping.

    Attributes:
        deobfuscated_name: Original method name (e.g. ``getHealth``).
        obfuscated_name: Obfuscated method name (e.g. ``a``).
        descriptor: Full method descriptor in the deobfuscated namespace
            (e.g. ``(Lnet/minecraft/world/entity/Entity;)V``).
    """
    model_config = _FROZEN

    deobfuscated_name: str = Field(..., min_length=1)
    obfuscated_name: str = Field(..., min_length=1)
    descriptor: str

    @field_validator("descriptor")
    @classmethod
    def _check_descriptor(cls, v: str) -> str:
        if not is_method_descriptor(v):
            raise ValueError(f"malformed method descriptor {v!r}")
        return v


MemberMapping = Union[FieldMapping, MethodMapping]


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------

class ClassMapping(BaseModel):
    """A class and all of its member mappings.

    Both names are canonicalized to internal form on construction, so no
    instance ever holds a dotted class name.

    Attributes:
        deobfuscated_name: Original class name in internal form.
        obfuscated_name: Obfuscated class name in internal form.
        fields: Field mappings in file order.
        methods: Method mappings in file order.
    """
    model_config = _FROZEN

    deobfuscated_name: str = Field(..., min_length=1)
    obfuscated_name: str = Field(..., min_length=1)
    fields: tuple[FieldMapping, ...] = ()
    methods: tuple[MethodMapping, ...] = ()

    @field_validator("deobfuscated_name", "obfuscated_name")
    @classmethod
    def _canonicalize(cls, v: str) -> str:
        return to_internal_name(v)


class MappingStats(BaseModel):
    """Entry counts of a loaded symbol table."""
    model_config = _FROZEN

    class_count: int = 0
    field_count: int = 0
    method_count: int = 0

    @property
    def member_count(self) -> int:
        return self.field_count + self.method_count

"""
Symbol Table
=============

Read-only index over the class mappings of one mapping file load.

Lookups by name work in either namespace.  A second set of indices is
keyed by obfuscated coordinates ``(owner, name, descriptor)`` for
consumers that walk an obfuscated binary and need the readable names.
Descriptors in the mapping file are written with deobfuscated class
names, so those keys are built from descriptors translated into the
obfuscated namespace.

Usage::

    table = SymbolTable(ProGuardParser().parse_text(text))
    level = table.find_class("net.minecraft.world.level.Level")
    table.remap_descriptor("(Lnet/minecraft/world/entity/Entity;)V",
                           RemapDirection.TO_OBFUSCATED)
    table.remap_method("abc", "a", "(Lbcd;)V")     # -> "setEntity"
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, NamedTuple, Optional

from mappings.core.descriptor import remap_descriptor, to_internal_name
from mappings.core.models import (
    ClassMapping,
    MappingStats,
    MemberMapping,
    Namespace,
    RemapDirection,
)


class _MemberKey(NamedTuple):
    owner: str
    name: str
    descriptor: str


class SymbolTable:
    """Immutable symbol table built from parsed class mappings.

    When two entries share a class name the later one wins, matching the
    order of the mapping file.

    Args:
        classes: Class mappings, typically straight from
            :meth:`ProGuardParser.parse`.
    """

    def __init__(self, classes: Iterable[ClassMapping]) -> None:
        self._classes: tuple[ClassMapping, ...] = tuple(classes)

        by_deobf: dict[str, ClassMapping] = {}
        by_obf: dict[str, ClassMapping] = {}
        for cm in self._classes:
            by_deobf[cm.deobfuscated_name] = cm
            by_obf[cm.obfuscated_name] = cm
        self._by_deobf = MappingProxyType(by_deobf)
        self._by_obf = MappingProxyType(by_obf)

        self._to_obf: Mapping[str, str] = MappingProxyType(
            {name: cm.obfuscated_name for name, cm in by_deobf.items()}
        )
        self._to_deobf: Mapping[str, str] = MappingProxyType(
            {name: cm.deobfuscated_name for name, cm in by_obf.items()}
        )

        fields: dict[_MemberKey, str] = {}
        methods: dict[_MemberKey, str] = {}
        for cm in self._classes:
            for fm in cm.fields:
                key = _MemberKey(
                    cm.obfuscated_name,
                    fm.obfuscated_name,
                    remap_descriptor(fm.descriptor, self._to_obf),
                )
                fields[key] = fm.deobfuscated_name
            for mm in cm.methods:
                key = _MemberKey(
                    cm.obfuscated_name,
                    mm.obfuscated_name,
                    remap_descriptor(mm.descriptor, self._to_obf),
                )
                methods[key] = mm.deobfuscated_name
        self._fields = MappingProxyType(fields)
        self._methods = MappingProxyType(methods)

    # ------------------------------------------------------------------ #
    #  Container protocol
    # ------------------------------------------------------------------ #

    @property
    def classes(self) -> tuple[ClassMapping, ...]:
        """All class mappings in file order."""
        return self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ClassMapping]:
        return iter(self._classes)

    @property
    def stats(self) -> MappingStats:
        return MappingStats(
            class_count=len(self._classes),
            field_count=sum(len(cm.fields) for cm in self._classes),
            method_count=sum(len(cm.methods) for cm in self._classes),
        )

    # ------------------------------------------------------------------ #
    #  Name lookups
    # ------------------------------------------------------------------ #

    def find_class(
        self, name: str, namespace: Optional[Namespace] = None
    ) -> ClassMapping | None:
        """Find a class by name.

        Args:
            name: Class name in dotted or internal form.
            namespace: Namespace *name* belongs to.  ``None`` tries the
                deobfuscated namespace first, then the obfuscated one.
        """
        internal = to_internal_name(name)
        if namespace is Namespace.DEOBFUSCATED:
            return self._by_deobf.get(internal)
        if namespace is Namespace.OBFUSCATED:
            return self._by_obf.get(internal)
        return self._by_deobf.get(internal) or self._by_obf.get(internal)

    def find_member(
        self,
        class_mapping: ClassMapping,
        name: str,
        namespace: Optional[Namespace] = None,
        descriptor: str | None = None,
    ) -> MemberMapping | None:
        """Find a field or method of *class_mapping* by name.

        Fields are searched before methods.  Obfuscated names are heavily
        overloaded (many members are called ``a``), so pass *descriptor*
        to pick one.  It is compared in the namespace of *name*.

        Args:
            class_mapping: The owning class.
            name: Member name.
            namespace: Namespace of *name* and *descriptor*.  ``None``
                tries deobfuscated first, then obfuscated.
            descriptor: Optional field or method descriptor.
        """
        if namespace is None:
            return self.find_member(
                class_mapping, name, Namespace.DEOBFUSCATED, descriptor
            ) or self.find_member(
                class_mapping, name, Namespace.OBFUSCATED, descriptor
            )

        obfuscated = namespace is Namespace.OBFUSCATED
        members: tuple[MemberMapping, ...] = (
            *class_mapping.fields,
            *class_mapping.methods,
        )
        for member in members:
            member_name = (
                member.obfuscated_name if obfuscated else member.deobfuscated_name
            )
            if member_name != name:
                continue
            if descriptor is None:
                return member
            member_descriptor = (
                remap_descriptor(member.descriptor, self._to_obf)
                if obfuscated
                else member.descriptor
            )
            if member_descriptor == descriptor:
                return member
        return None

    # ------------------------------------------------------------------ #
    #  Descriptor translation
    # ------------------------------------------------------------------ #

    def class_substitutions(self, direction: RemapDirection) -> Mapping[str, str]:
        """The class name table used to translate in *direction*."""
        if direction is RemapDirection.TO_OBFUSCATED:
            return self._to_obf
        return self._to_deobf

    def remap_descriptor(self, descriptor: str, direction: RemapDirection) -> str:
        """Translate the class references in *descriptor* between namespaces.

        Classes absent from the table, such as JDK or library types, are
        left unchanged.
        """
        return remap_descriptor(descriptor, self.class_substitutions(direction))

    # ------------------------------------------------------------------ #
    #  Obfuscated-keyed lookups
    # ------------------------------------------------------------------ #

    def remap_class(self, obfuscated_name: str) -> str:
        """Deobfuscated internal name, or the input when unmapped."""
        return self._to_deobf.get(obfuscated_name, obfuscated_name)

    def remap_field(self, owner: str, name: str, descriptor: str) -> str:
        """Deobfuscated field name for obfuscated coordinates, or *name*."""
        return self._fields.get(_MemberKey(owner, name, descriptor), name)

    def remap_method(self, owner: str, name: str, descriptor: str) -> str:
        """Deobfuscated method name for obfuscated coordinates, or *name*."""
        return self._methods.get(_MemberKey(owner, name, descriptor), name)

"""
Mappings Console Output
========================

Rich terminal display for loaded symbol tables: a load summary, per-class
member tables with human-readable signatures, and descriptor remap
results.

Uses the AlloyConsole abstraction for consistent styling.
"""

from __future__ import annotations

from shared.console import AlloyConsole

from mappings.core.descriptor import split_method_descriptor, to_type_name
from mappings.core.models import (
    ClassMapping,
    FieldMapping,
    MappingStats,
    MemberMapping,
    MethodMapping,
    RemapDirection,
)


def format_signature(member: MemberMapping) -> str:
    """Render a member descriptor the way Java source declares it.

    ``FieldMapping(descriptor="[I")`` gives ``int[]``; a method with
    descriptor ``(ILfoo/Bar;)V`` gives ``void (int, foo.Bar)``.
    """
    if isinstance(member, FieldMapping):
        return to_type_name(member.descriptor)
    params, returns = split_method_descriptor(member.descriptor)
    args = ", ".join(to_type_name(param) for param in params)
    return f"{to_type_name(returns)} ({args})"


class MappingsConsoleOutput:
    """Renders mapping engine results to the terminal.

    Args:
        console: Shared console instance.  A new one is created if omitted.
    """

    def __init__(self, console: AlloyConsole | None = None) -> None:
        self._console = console or AlloyConsole()

    def display_summary(self, stats: MappingStats, source: str) -> None:
        """Show the entry counts of a freshly loaded table."""
        self._console.section("Mapping Summary")
        self._console.table(
            "Symbol Table",
            ["Source", "Classes", "Fields", "Methods"],
            [
                (
                    source,
                    f"{stats.class_count:,}",
                    f"{stats.field_count:,}",
                    f"{stats.method_count:,}",
                )
            ],
            styles=["alloy.dim", "", "", ""],
        )

    def display_class(self, class_mapping: ClassMapping) -> None:
        """Show one class and every member mapping it declares."""
        self._console.section(
            f"{class_mapping.deobfuscated_name} -> {class_mapping.obfuscated_name}"
        )
        rows = [
            ("field", m.deobfuscated_name, m.obfuscated_name, format_signature(m))
            for m in class_mapping.fields
        ] + [
            ("method", m.deobfuscated_name, m.obfuscated_name, format_signature(m))
            for m in class_mapping.methods
        ]
        if not rows:
            self._console.info("Class declares no member mappings.")
            return
        self._console.table(
            "Members",
            ["Kind", "Deobfuscated", "Obfuscated", "Signature"],
            rows,
            styles=["alloy.dim", "alloy.deobf", "alloy.obf", "alloy.descriptor"],
        )

    def display_member(
        self, class_mapping: ClassMapping, member: MemberMapping
    ) -> None:
        kind = "method" if isinstance(member, MethodMapping) else "field"
        self._console.table(
            f"{class_mapping.deobfuscated_name} {kind}",
            ["Deobfuscated", "Obfuscated", "Descriptor", "Signature"],
            [
                (
                    member.deobfuscated_name,
                    member.obfuscated_name,
                    member.descriptor,
                    format_signature(member),
                )
            ],
            styles=["alloy.deobf", "alloy.obf", "alloy.descriptor", ""],
        )

    def display_remap(
        self, original: str, remapped: str, direction: RemapDirection
    ) -> None:
        self._console.table(
            "Descriptor Remap",
            ["Direction", "Input", "Output"],
            [(direction.value, original, remapped)],
            styles=["alloy.dim", "alloy.descriptor", "alloy.descriptor"],
        )

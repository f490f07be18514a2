"""
ProGuard Mapping File Parser
=============================

Line-oriented parser for ProGuard/R8 ``mapping.txt`` files, the format
Mojang publishes its official name mappings in.

Format::

    # comment
    net.minecraft.world.level.Level -> abc:
        int tickCount -> a
        1:1:void <init>() -> <init>
        3:7:int getTickCount() -> a
        9:22:void setEntity(net.minecraft.world.entity.Entity) -> a

A line with no leading whitespace is a class header; an indented line is
a field or method of the most recent header.  The parser is a two-state
machine, *no active class* and *in class*, whose single transition
flushes the pending class into the output.  That transition runs on every
header and once more at end of input.

Parsing is atomic: a malformed line raises
:class:`~mappings.core.errors.MalformedMappingError` and no classes are
returned.  The one intentional skip is a method whose name contains a
``.``, which R8 emits for code inlined from another class.

References:
    - Guardsquare. ProGuard manual, "Retrace".
      https://www.guardsquare.com/manual/tools/retrace
    - Google. R8 retrace mapping format.
      https://r8.googlesource.com/r8/+/refs/heads/main/doc/retrace.md
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from pydantic import ValidationError

from shared.logger import AlloyLogger

from mappings.core.descriptor import (
    to_descriptor,
    to_internal_name,
    to_method_descriptor,
)
from mappings.core.errors import MalformedMappingError
from mappings.core.models import (
    ClassMapping,
    FieldMapping,
    MemberMapping,
    MethodMapping,
)


# ---------------------------------------------------------------------------
# Format tokens
# ---------------------------------------------------------------------------

SEPARATOR: str = " -> "
COMMENT_MARKER: str = "#"
HEADER_TERMINATOR: str = ":"
LINE_RANGE_SEPARATOR: str = ":"
PARAM_SEPARATOR: str = ","


# ---------------------------------------------------------------------------
# Parser state
# ---------------------------------------------------------------------------

@dataclass
class _PendingClass:
    """Members accumulated for the class whose header was seen last."""
    deobfuscated_name: str
    obfuscated_name: str
    line: str
    line_number: int
    fields: list[FieldMapping] = field(default_factory=list)
    methods: list[MethodMapping] = field(default_factory=list)

    def add(self, member: MemberMapping) -> None:
        if isinstance(member, MethodMapping):
            self.methods.append(member)
        else:
            self.fields.append(member)

    def build(self) -> ClassMapping:
        try:
            return ClassMapping(
                deobfuscated_name=self.deobfuscated_name,
                obfuscated_name=self.obfuscated_name,
                fields=tuple(self.fields),
                methods=tuple(self.methods),
            )
        except ValidationError as exc:
            raise MalformedMappingError(
                f"invalid class mapping ({exc.error_count()} errors)",
                self.line,
                self.line_number,
            ) from exc


@dataclass
class _ParseState:
    """``pending is None`` is the *no active class* state."""
    pending: Optional[_PendingClass] = None
    classes: list[ClassMapping] = field(default_factory=list)
    skipped: int = 0

    def transition(self, next_class: Optional[_PendingClass]) -> None:
        """Flush the active class, if any, and make *next_class* active."""
        if self.pending is not None:
            self.classes.append(self.pending.build())
        self.pending = next_class


# ---------------------------------------------------------------------------
# ProGuard Parser
# ---------------------------------------------------------------------------

class ProGuardParser:
    """Parses ProGuard mapping text into :class:`ClassMapping` objects.

    All class names in the result use JVM internal form and all member
    descriptors are JVM descriptors in the deobfuscated namespace.

    Usage::

        parser = ProGuardParser()
        with open("client_mappings.txt", encoding="utf-8") as fh:
            classes = parser.parse(fh)

    Args:
        drop_inlined_methods: Skip method entries whose name contains a
            ``.``.  When ``False`` they are kept under their dotted name.
        logger: Logger for skip diagnostics.  A quiet default is created
            when omitted.
    """

    def __init__(
        self,
        *,
        drop_inlined_methods: bool = True,
        logger: AlloyLogger | None = None,
    ) -> None:
        self._drop_inlined_methods = drop_inlined_methods
        self._logger = logger or AlloyLogger(
            "mappings.proguard", log_level="WARNING"
        )

    # ------------------------------------------------------------------ #
    #  Entry points
    # ------------------------------------------------------------------ #

    def parse(self, lines: Iterable[str]) -> list[ClassMapping]:
        """Parse mapping lines into class mappings, in file order.

        Args:
            lines: Mapping file lines, with or without line terminators.

        Returns:
            One :class:`ClassMapping` per class header.

        Raises:
            MalformedMappingError: On the first malformed line.  The
                whole parse fails; no partial result is returned.
        """
        state = _ParseState()

        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            content = line.strip()
            if not content or content.startswith(COMMENT_MARKER):
                continue

            if not line[0].isspace():
                state.transition(self._parse_class_header(line, line_number))
                continue

            if state.pending is None:
                raise MalformedMappingError(
                    "member line before any class header", line, line_number
                )

            member = self._parse_member(content, line, line_number)
            if member is None:
                state.skipped += 1
                continue
            state.pending.add(member)

        state.transition(None)

        if state.skipped:
            self._logger.debug(
                "Dropped %d inlined method entries", state.skipped
            )
        return state.classes

    def parse_text(self, text: str) -> list[ClassMapping]:
        """Parse a complete mapping file held in memory."""
        return self.parse(text.splitlines())

    # ------------------------------------------------------------------ #
    #  Class headers
    # ------------------------------------------------------------------ #

    def _parse_class_header(self, line: str, line_number: int) -> _PendingClass:
        """Parse ``original.ClassName -> obfuscated:``."""
        header = line.rstrip()
        left, separator, right = header.partition(SEPARATOR)
        if not separator:
            raise MalformedMappingError(
                f"class header without {SEPARATOR.strip()!r}", line, line_number
            )
        if not right.endswith(HEADER_TERMINATOR):
            raise MalformedMappingError(
                f"class header not terminated by {HEADER_TERMINATOR!r}",
                line,
                line_number,
            )

        deobfuscated = left.strip()
        obfuscated = right[: -len(HEADER_TERMINATOR)].strip()
        if not deobfuscated or not obfuscated:
            raise MalformedMappingError("empty class name", line, line_number)

        return _PendingClass(
            deobfuscated_name=to_internal_name(deobfuscated),
            obfuscated_name=to_internal_name(obfuscated),
            line=line,
            line_number=line_number,
        )

    # ------------------------------------------------------------------ #
    #  Members
    # ------------------------------------------------------------------ #

    def _parse_member(
        self, content: str, line: str, line_number: int
    ) -> MemberMapping | None:
        """Parse one trimmed member line; ``None`` means a documented skip."""
        left, separator, obfuscated = content.partition(SEPARATOR)
        if not separator:
            raise MalformedMappingError(
                f"member line without {SEPARATOR.strip()!r}", line, line_number
            )
        obfuscated = obfuscated.strip()
        if not obfuscated:
            raise MalformedMappingError(
                "empty obfuscated member name", line, line_number
            )

        declaration = self._strip_line_range(left, line, line_number)
        if "(" in declaration:
            return self._parse_method(declaration, obfuscated, line, line_number)
        return self._parse_field(declaration, obfuscated, line, line_number)

    @staticmethod
    def _strip_line_range(declaration: str, line: str, line_number: int) -> str:
        """Remove a leading ``start:end:`` line range.

        Only a purely numeric first token counts as a range; colons
        elsewhere in the declaration are left alone.
        """
        head, colon, rest = declaration.partition(LINE_RANGE_SEPARATOR)
        if not colon or not (head.isascii() and head.isdigit()):
            return declaration
        _, colon, remainder = rest.partition(LINE_RANGE_SEPARATOR)
        if not colon:
            raise MalformedMappingError(
                "line-number prefix without a second ':'", line, line_number
            )
        return remainder

    def _parse_method(
        self, declaration: str, obfuscated: str, line: str, line_number: int
    ) -> MethodMapping | None:
        """Parse ``returnType name(paramType1,paramType2)``.

        Anything after the closing parenthesis, such as R8's original
        line range ``:12:14``, is ignored.
        """
        open_paren = declaration.index("(")
        close_paren = declaration.find(")", open_paren)
        if close_paren == -1:
            raise MalformedMappingError(
                "method without closing ')'", line, line_number
            )

        return_type, name = self._split_declaration(
            declaration[:open_paren], line, line_number
        )
        if "." in name and self._drop_inlined_methods:
            self._logger.debug(
                "Skipping inlined method %s at line %d", name, line_number
            )
            return None

        params_text = declaration[open_paren + 1 : close_paren].strip()
        params = (
            [param.strip() for param in params_text.split(PARAM_SEPARATOR)]
            if params_text
            else []
        )

        return self._build_member(
            MethodMapping,
            name,
            obfuscated,
            to_method_descriptor(return_type, params),
            line,
            line_number,
        )

    def _parse_field(
        self, declaration: str, obfuscated: str, line: str, line_number: int
    ) -> FieldMapping:
        """Parse ``type fieldName``."""
        type_name, name = self._split_declaration(declaration, line, line_number)
        return self._build_member(
            FieldMapping,
            name,
            obfuscated,
            to_descriptor(type_name),
            line,
            line_number,
        )

    @staticmethod
    def _split_declaration(
        text: str, line: str, line_number: int
    ) -> tuple[str, str]:
        """Split ``<type> <name>`` at the last space."""
        type_name, space, name = text.strip().rpartition(" ")
        type_name = type_name.strip()
        if not space or not type_name or not name:
            raise MalformedMappingError(
                "expected '<type> <name>'", line, line_number
            )
        return type_name, name

    @staticmethod
    def _build_member(
        model: type[FieldMapping] | type[MethodMapping],
        name: str,
        obfuscated: str,
        descriptor: str,
        line: str,
        line_number: int,
    ) -> MemberMapping:
        try:
            return model(
                deobfuscated_name=name,
                obfuscated_name=obfuscated,
                descriptor=descriptor,
            )
        except ValidationError as exc:
            raise MalformedMappingError(
                f"invalid member ({exc.errors()[0]['msg']})", line, line_number
            ) from exc

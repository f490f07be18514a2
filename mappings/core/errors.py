"""
Mapping Engine Exceptions
==========================

Exception hierarchy raised by the descriptor codec, the ProGuard parser
and the load engine.  Every fatal condition propagates to the direct
caller; nothing here is caught and logged inside the engine.
"""

from __future__ import annotations


class MappingError(Exception):
    """Base class for all mapping engine errors."""


class MalformedMappingError(MappingError):
    """A mapping file line violates the ProGuard mapping grammar.

    Raised for the whole parse: no partial class list is ever returned
    alongside this error.

    Attributes:
        line:        Raw content of the offending line (without newline).
        line_number: 1-based position of the line in the input.
        reason:      Short description of what is wrong with it.
    """

    def __init__(self, reason: str, line: str, line_number: int) -> None:
        self.reason = reason
        self.line = line
        self.line_number = line_number
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class DescriptorError(MappingError, ValueError):
    """A descriptor string does not follow the type descriptor grammar."""


class MappingLoadError(MappingError):
    """The mapping engine cannot produce or serve a symbol table."""

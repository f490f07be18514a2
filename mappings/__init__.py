"""
Alloy Mappings -- Mapping Translation Engine
=============================================

Parses ProGuard-format mapping files into an immutable symbol table that
relates the deobfuscated and obfuscated names of every class, field and
method of a compiled JVM module, and translates JVM type descriptors
between the two namespaces.

Capabilities:
    - Atomic, fail-fast ProGuard/R8 mapping file parsing
    - JVM descriptor encoding, decoding and class-name remapping
    - Class and member lookup in either namespace
    - Obfuscated-coordinate lookups for binary remappers
    - Rich console display and JSON table export

References:
    - Guardsquare. ProGuard manual, "Retrace".
    - The Java Virtual Machine Specification, section 4.3 "Descriptors".
"""

__version__ = "1.0.0"

from mappings.core.engine import MappingEngine
from mappings.core.errors import MalformedMappingError
from mappings.core.models import ClassMapping, FieldMapping, MethodMapping
from mappings.core.symbol_table import SymbolTable
from mappings.parsers.proguard import ProGuardParser

__all__ = [
    "MappingEngine",
    "ProGuardParser",
    "SymbolTable",
    "ClassMapping",
    "FieldMapping",
    "MethodMapping",
    "MalformedMappingError",
]

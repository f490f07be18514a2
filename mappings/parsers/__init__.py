"""Mapping file format parsers."""

from mappings.parsers.proguard import ProGuardParser

__all__ = ["ProGuardParser"]

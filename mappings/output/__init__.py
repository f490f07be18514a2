"""Mappings output: console display and JSON reports."""

from mappings.output.console import MappingsConsoleOutput
from mappings.output.report import MappingsReportGenerator

__all__ = ["MappingsConsoleOutput", "MappingsReportGenerator"]

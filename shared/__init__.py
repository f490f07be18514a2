"""
Alloy Shared Module
===================

Configuration, structured logging and console presentation shared by the
Alloy mapping tools.
"""

from shared.config import AlloyConfig

__all__ = ["AlloyConfig"]

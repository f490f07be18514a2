"""Mappings core: descriptor codec, symbol model, symbol table and load engine."""

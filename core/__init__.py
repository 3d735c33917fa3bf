"""Shared DSL framework: grammar-driven parser, transformer, program and compiler bases."""

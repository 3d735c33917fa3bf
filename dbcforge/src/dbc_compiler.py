#!/usr/bin/env python3
"""
DBC Compiler Implementation

Canonicalising pipeline on top of the core DSLCompiler: parse, assemble,
validate and render a DBC file back to its canonical text.
"""

from typing import Optional, Union

from core.compiler import DSLCompiler

from .dbc_config import DbcSettings
from .dbc_document import DbcDocument
from .dbc_generator import generate_dbc
from .dbc_parser import DbcParser


class DbcCompiler(DSLCompiler):
    """
    DBC compiler that inherits from the core DSLCompiler.
    Compiles DBC text into its canonical form.
    """

    def __init__(self, settings: Optional[DbcSettings] = None):
        """
        Initialize the DBC compiler.

        Args:
            settings: Parser settings (defaults to the environment)
        """
        parser = DbcParser(settings=settings)
        super().__init__(parser, parser.transformer)

    def _build_program(self, code: Union[str, bytes]) -> DbcDocument:
        # signals are attached across items, so assembly replaces a plain transform
        return self.parser.parse_and_transform(code)

    def _compile(self, program: DbcDocument) -> str:
        return generate_dbc(program)


def compile_dbc(content: Union[str, bytes], settings: Optional[DbcSettings] = None) -> str:
    """
    Convenience function to canonicalise DBC text.

    Args:
        content: DBC source text or bytes
        settings: Parser settings (defaults to the environment)

    Returns:
        Canonical DBC text

    Raises:
        DbcSyntaxError, DbcIncompleteError: the input does not parse completely
        ValueError: the document breaks a representational invariant
    """
    compiler = DbcCompiler(settings=settings)
    return compiler.compile(content)

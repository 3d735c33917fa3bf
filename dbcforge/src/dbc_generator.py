#!/usr/bin/env python3
"""
DBC Generator
=====================================================

Renders a DbcDocument back to canonical DBC text. Sections are emitted in a
fixed order, one entry per line, separated by blank lines; empty sections are
left out. Re-parsing the output yields a document equal to the input.
"""

from typing import Iterable, List

from .dbc_document import DbcDocument


def _lines(entries: Iterable) -> str:
    return "\n".join(entry.to_dbc() for entry in entries)


def generate_header(document: DbcDocument) -> str:
    """VERSION, NS_, BS_ and BU_ lines; always present."""
    header_lines = [document.version.to_dbc()]

    header_lines.append("NS_ :")
    header_lines.extend(symbol.to_dbc() for symbol in document.new_symbols)

    if document.bit_timing is not None:
        if document.bit_timing:
            rates = ",".join(rate.to_dbc() for rate in document.bit_timing)
            header_lines.append(f"BS_: {rates}")
        else:
            header_lines.append("BS_:")

    if document.nodes:
        header_lines.append("BU_: " + " ".join(node.to_dbc() for node in document.nodes))
    else:
        header_lines.append("BU_:")

    return "\n".join(header_lines)


def generate_sections(document: DbcDocument) -> List[str]:
    """Every non-empty section after the header, in file order."""
    sections = [
        _lines(document.value_tables),
        # each message block is followed by its indented signals
        "\n\n".join(message.to_dbc() for message in document.messages),
        _lines(document.message_transmitters),
        _lines(document.environment_variables),
        _lines(document.environment_variable_data),
        _lines(document.signal_types),
        _lines(document.comments),
        _lines(document.attribute_definitions),
        _lines(document.relation_attribute_definitions),
        _lines(document.attribute_values),
        _lines(document.relation_attribute_values),
        _lines(document.attribute_defaults),
        _lines(document.relation_attribute_defaults),
        _lines(document.value_descriptions),
        _lines(document.signal_type_refs),
        _lines(document.signal_groups),
        _lines(document.signal_extended_value_type_list),
        _lines(document.extended_multiplex),
    ]
    return [section for section in sections if section]


def generate_dbc(document: DbcDocument) -> str:
    """
    Generate the canonical DBC text of a document.

    Args:
        document: Document to render

    Returns:
        DBC text with LF line endings and a trailing newline
    """
    program_lines = [generate_header(document)]
    program_lines.extend(generate_sections(document))
    return "\n\n".join(program_lines) + "\n"

"""
Document assembly

Folds the top-level items of a DBC parse tree into a DbcDocument. Signals are
owned by position: each SG_ line belongs to the BO_ line before it. They are
staged with the id of that message during the scan and attached in a final
pass, so the document stays immutable.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from lark import Tree

from .dbc_document import DbcDocument
from .dbc_errors import OrphanSignalError, UnknownRuleError
from .dbc_ir import Message, MessageId, Signal, Version

logger = logging.getLogger(__name__)

# rule name -> document collection that receives one entry per item
COLLECTIONS = {
    "value_table": "value_tables",
    "message_transmitter": "message_transmitters",
    "environment_variable": "environment_variables",
    "environment_variable_data": "environment_variable_data",
    "signal_type": "signal_types",
    "comment": "comments",
    "attribute_definition": "attribute_definitions",
    "attribute_definition_for_relation": "relation_attribute_definitions",
    "attribute_default": "attribute_defaults",
    "attribute_default_for_relation": "relation_attribute_defaults",
    "attribute_value_for_object": "attribute_values",
    "attribute_value_for_relation": "relation_attribute_values",
    "value_description": "value_descriptions",
    "signal_type_ref": "signal_type_refs",
    "signal_group": "signal_groups",
    "signal_extended_value_type": "signal_extended_value_type_list",
    "extended_multiplex": "extended_multiplex",
}

# rules whose value is a tuple of entries for one collection
LIST_COLLECTIONS = {
    "new_symbols": "new_symbols",
    "nodes": "nodes",
}


class DocumentAssembler:
    """Builds a DbcDocument from the root `file` tree in one pass."""

    def __init__(self, transformer, strict_signals: bool = False):
        """
        Args:
            transformer: DbcTransformer used for every top-level item
            strict_signals: Raise OrphanSignalError instead of dropping signals
                that precede every message
        """
        self.transformer = transformer
        self.strict_signals = strict_signals

    def assemble(self, tree: Tree) -> DbcDocument:
        if not isinstance(tree, Tree) or str(tree.data) != "file":
            raise UnknownRuleError(str(tree.data) if isinstance(tree, Tree) else type(tree).__name__)

        collections: Dict[str, List[Any]] = {name: [] for name in COLLECTIONS.values()}
        for name in LIST_COLLECTIONS.values():
            collections[name] = []
        version: Optional[Version] = None
        bit_timing: Optional[List[Any]] = None
        messages: List[Message] = []
        staged: List[Tuple[MessageId, Signal]] = []
        current_message: Optional[MessageId] = None

        for child in tree.children:
            rule = str(child.data)
            value = self.transformer.transform(child)

            if rule in COLLECTIONS:
                # an empty untargeted comment carries nothing
                if value is not None:
                    collections[COLLECTIONS[rule]].append(value)
            elif rule in LIST_COLLECTIONS:
                collections[LIST_COLLECTIONS[rule]].extend(value)
            elif rule == "version":
                if version is None:
                    version = value
                else:
                    logger.warning(f"Ignoring duplicate VERSION {value.text!r}, "
                                   f"keeping {version.text!r}")
            elif rule == "bit_timing":
                if bit_timing is None:
                    bit_timing = []
                bit_timing.extend(value)
            elif rule == "message":
                messages.append(value)
                current_message = value.message_id
            elif rule == "signal":
                if current_message is None:
                    line = getattr(child.meta, "line", None)
                    if self.strict_signals:
                        raise OrphanSignalError(value.name, line)
                    logger.warning(f"Dropping signal {value.name!r} at line {line}: "
                                   "no message precedes it")
                    continue
                staged.append((current_message, value))
            else:
                raise UnknownRuleError(rule)

        return DbcDocument(
            version=version if version is not None else Version(),
            bit_timing=tuple(bit_timing) if bit_timing is not None else None,
            messages=self._attach_signals(messages, staged),
            **{name: tuple(entries) for name, entries in collections.items()},
        )

    def _attach_signals(self, messages: List[Message],
                        staged: List[Tuple[MessageId, Signal]]) -> Tuple[Message, ...]:
        """Give each staged signal to the first message carrying its id."""
        signals: Dict[int, List[Signal]] = {}
        for message_id, signal in staged:
            for index, message in enumerate(messages):
                if message.message_id == message_id:
                    signals.setdefault(index, []).append(signal)
                    break

        attached = []
        for index, message in enumerate(messages):
            if index in signals:
                logger.debug(f"Attaching {len(signals[index])} signals to message "
                             f"{message.name} ({message.message_id})")
                message = replace(message, signals=message.signals + tuple(signals[index]))
            attached.append(message)
        return tuple(attached)

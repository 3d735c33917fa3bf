from dataclasses import dataclass, field
from typing import Optional, Tuple

from core.dataclass import DSLProgram

from .dbc_errors import MultipleMultiplexorsError
from .dbc_ir import (
    AttributeDefault, AttributeDefinition, AttributeValueForObject, Baudrate, Comment,
    EnvironmentVariable, EnvironmentVariableData, ExtendedMultiplex, Message, MessageComment,
    MessageId, MessageTransmitter, MultiplexKind, Node, RelationAttributeDefault,
    RelationAttributeDefinition, RelationAttributeValue, Signal, SignalComment,
    SignalExtendedValueType, SignalExtendedValueTypeList, SignalGroups, SignalType,
    SignalTypeRef, SignalValueDescription, Symbol, ValDescription, ValueDescription,
    ValueTable, Version,
)

"""
DBC document

The aggregate built from one complete DBC file. Collections keep file order and
never enforce key uniqueness: every lookup is a linear scan that returns the
first structural match.
"""


@dataclass(frozen=True)
class DbcDocument(DSLProgram):
    """
    Complete DBC file representation.
    Extends the core DSLProgram and implements validation.
    """
    version: Version = field(default_factory=Version)
    new_symbols: Tuple[Symbol, ...] = ()
    bit_timing: Optional[Tuple[Baudrate, ...]] = None
    nodes: Tuple[Node, ...] = ()
    value_tables: Tuple[ValueTable, ...] = ()
    messages: Tuple[Message, ...] = ()
    message_transmitters: Tuple[MessageTransmitter, ...] = ()
    environment_variables: Tuple[EnvironmentVariable, ...] = ()
    environment_variable_data: Tuple[EnvironmentVariableData, ...] = ()
    signal_types: Tuple[SignalType, ...] = ()
    comments: Tuple[Comment, ...] = ()
    attribute_definitions: Tuple[AttributeDefinition, ...] = ()
    relation_attribute_definitions: Tuple[RelationAttributeDefinition, ...] = ()
    attribute_defaults: Tuple[AttributeDefault, ...] = ()
    relation_attribute_defaults: Tuple[RelationAttributeDefault, ...] = ()
    attribute_values: Tuple[AttributeValueForObject, ...] = ()
    relation_attribute_values: Tuple[RelationAttributeValue, ...] = ()
    value_descriptions: Tuple[ValueDescription, ...] = ()
    signal_type_refs: Tuple[SignalTypeRef, ...] = ()
    signal_groups: Tuple[SignalGroups, ...] = ()
    signal_extended_value_type_list: Tuple[SignalExtendedValueTypeList, ...] = ()
    extended_multiplex: Tuple[ExtendedMultiplex, ...] = ()

    def validate(self) -> None:
        """Check representational invariants (id ranges, sizes); never cross references."""
        for message in self.messages:
            message.validate()
        for transmitter in self.message_transmitters:
            transmitter.message_id.validate()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def message_by_id(self, message_id: MessageId) -> Optional[Message]:
        for message in self.messages:
            if message.message_id == message_id:
                return message
        return None

    def signal_by_name(self, message_id: MessageId, signal_name: str) -> Optional[Signal]:
        """Signal `signal_name` of the message `message_id`, if both exist."""
        message = self.message_by_id(message_id)
        if message is None:
            return None
        return message.signal(signal_name)

    def message_comment(self, message_id: MessageId) -> Optional[str]:
        for comment in self.comments:
            if isinstance(comment, MessageComment) and comment.message_id == message_id:
                return comment.comment
        return None

    def signal_comment(self, message_id: MessageId, signal_name: str) -> Optional[str]:
        for comment in self.comments:
            if (isinstance(comment, SignalComment) and comment.message_id == message_id
                    and comment.signal_name == signal_name):
                return comment.comment
        return None

    def value_descriptions_for_signal(self, message_id: MessageId,
                                      signal_name: str) -> Optional[Tuple[ValDescription, ...]]:
        for entry in self.value_descriptions:
            if (isinstance(entry, SignalValueDescription) and entry.message_id == message_id
                    and entry.signal_name == signal_name):
                return entry.descriptions
        return None

    def extended_value_type_for_signal(self, message_id: MessageId,
                                       signal_name: str) -> Optional[SignalExtendedValueType]:
        for entry in self.signal_extended_value_type_list:
            if entry.message_id == message_id and entry.signal_name == signal_name:
                return entry.signal_extended_value_type
        return None

    def message_multiplexor_switch(self, message_id: MessageId) -> Optional[Signal]:
        """
        The switch signal of a simply multiplexed message.

        Returns None when the message does not exist or is not multiplexed.
        Raises MultipleMultiplexorsError when any SG_MUL_VAL_ entry refers to
        the message, since extended multiplexing has no single switch.
        """
        if any(entry.message_id == message_id for entry in self.extended_multiplex):
            raise MultipleMultiplexorsError(message_id)

        message = self.message_by_id(message_id)
        if message is None:
            return None
        for signal in message.signals:
            if signal.multiplexer_indicator.kind is MultiplexKind.MULTIPLEXOR:
                return signal
        return None

#!/usr/bin/env python3
"""
DBC Parser Implementation

Grammar-driven parser for CAN database (DBC) files built on the core DSL
framework: `DbcParser` loads dbc.lark into an LALR Lark parser, `DbcTransformer`
turns each grammar rule into the matching IR value, and the DocumentAssembler
folds the top-level items into a DbcDocument.
"""

import logging
import math
import re
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Type, Union

from lark import Token, Tree
from lark.exceptions import UnexpectedInput

from core.parser import DSLParser, DSLTransformer

from .dbc_assembler import DocumentAssembler
from .dbc_config import DbcSettings
from .dbc_document import DbcDocument
from .dbc_errors import (
    DbcEncodingError, DbcError, DbcIncompleteError, DbcSyntaxError, ExpectedEmptyError,
    ExpectedRuleError, InvalidDataError, InvalidNumericValueError, NoMoreRulesError,
    RuleNotImplementedError, UnknownRuleError,
)
from .dbc_ir import (
    AccessNode, AccessType, AttributeDefault, AttributeDefinition, AttributeObjectType,
    AttributeTarget, AttributeTypeKind, AttributeValue, AttributeValueForObject,
    AttributeValueKind, AttributeValueType, Baudrate, ByteOrder, Comment, EnvironmentVariable,
    EnvironmentVariableData, EnvType, EnvVarAttributeValue, EnvVarValueDescription,
    ExtendedMultiplex, ExtendedMultiplexMapping, Message, MessageAttributeValue, MessageId,
    MessageTransmitter, MultiplexIndicator, NetworkNodeAttributeValue, Node,
    NodeMessageRelation, NodeSignalRelation, RawAttributeValue, RelationAttributeDefault,
    RelationAttributeDefinition, RelationAttributeValue, RelationObjectType, RelationTarget,
    Signal, SignalAttributeValue, SignalExtendedValueType, SignalExtendedValueTypeList,
    SignalGroups, SignalType, SignalTypeRef, SignalValueDescription, Symbol, Transmitter,
    ValDescription, ValueTable, ValueType, Version, is_vector_xxx,
)

logger = logging.getLogger(__name__)

# Grammar file path
GRAMMAR_FILE = Path(__file__).parent / "dbc.lark"

END_OF_INPUT = "$END"
MAX_RAW_MESSAGE_ID = 0xFFFFFFFF
NAME_SEPARATOR = re.compile(r"[ \t]*,[ \t]*|[ \t]+")


# ============================================================================
# TOKEN CONVERSION
# ============================================================================

def _describe(child: Any) -> str:
    if isinstance(child, Token):
        return child.type
    if isinstance(child, Tree):
        return str(child.data)
    return type(child).__name__


def _int(token: Token) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidNumericValueError(str(token))


def _float(token: Token) -> float:
    try:
        value = float(token)
    except ValueError:
        raise InvalidNumericValueError(str(token))
    # "1e400" overflows to inf, which has no DBC spelling
    if not math.isfinite(value):
        raise InvalidNumericValueError(str(token))
    return value


def _number(token: Token) -> AttributeValue:
    try:
        value = AttributeValue.parse_number(str(token))
    except ValueError:
        raise InvalidNumericValueError(str(token))
    if value.kind is AttributeValueKind.DOUBLE and not math.isfinite(value.value):
        raise InvalidNumericValueError(str(token))
    return value


def _names(token: Optional[Token]) -> List[str]:
    """Names of a same-line list token, split on blanks and commas."""
    if token is None:
        return []
    return NAME_SEPARATOR.split(str(token).strip())


def _message_id(token: Token) -> MessageId:
    raw = _int(token)
    if raw > MAX_RAW_MESSAGE_ID:
        raise InvalidNumericValueError(str(token))
    return MessageId.from_raw(raw)


def _text(token: Token) -> str:
    """Content of a quoted string, escapes kept as written."""
    return str(token)[1:-1]


def _choice(enum_type, token: Token):
    try:
        return enum_type(str(token))
    except ValueError:
        raise InvalidDataError(str(token), f"not a valid {enum_type.__name__}")


class _Children:
    """Cursor over the children handed to a transformer callback."""

    def __init__(self, children: List[Any]):
        self._children = list(children)
        self._position = 0

    def _peek(self) -> Any:
        if self._position < len(self._children):
            return self._children[self._position]
        return None

    def _take(self, expected: str, accept: Callable[[Any], bool]) -> Any:
        if self._position >= len(self._children):
            raise NoMoreRulesError(expected)
        child = self._children[self._position]
        if isinstance(child, Tree):
            # a rule without a transformer callback
            raise UnknownRuleError(str(child.data))
        if not accept(child):
            raise ExpectedRuleError(expected, _describe(child))
        self._position += 1
        return child

    def token(self, token_type: str) -> Token:
        return self._take(token_type, lambda c: isinstance(c, Token) and c.type == token_type)

    def optional_token(self, token_type: str) -> Optional[Token]:
        child = self._peek()
        if isinstance(child, Token) and child.type == token_type:
            self._position += 1
            return child
        return None

    def tokens(self, token_type: str) -> List[Token]:
        found = []
        token = self.optional_token(token_type)
        while token is not None:
            found.append(token)
            token = self.optional_token(token_type)
        return found

    def value(self, kind: Union[Type, Tuple[Type, ...]], expected: str) -> Any:
        return self._take(expected, lambda c: not isinstance(c, Token) and isinstance(c, kind))

    def optional_value(self, kind: Union[Type, Tuple[Type, ...]]) -> Any:
        child = self._peek()
        if not isinstance(child, (Token, Tree)) and isinstance(child, kind):
            self._position += 1
            return child
        return None

    def values(self, kind: Type) -> List[Any]:
        found = []
        child = self.optional_value(kind)
        while child is not None:
            found.append(child)
            child = self.optional_value(kind)
        return found

    def done(self) -> None:
        if self._position < len(self._children):
            raise ExpectedEmptyError(_describe(self._children[self._position]))


# ============================================================================
# PARSER
# ============================================================================

class DbcParser(DSLParser):
    """
    DBC parser that inherits from the core DSLParser.
    Loads the DBC grammar and builds DbcDocument objects.
    """

    def __init__(self, grammar_file: str = None, start_symbol: str = "file",
                 settings: Optional[DbcSettings] = None):
        """
        Initialize the DBC parser.

        Args:
            grammar_file: Path to the DBC grammar file (optional)
            start_symbol: The start symbol for grammar parsing
            settings: Parser settings; read from the environment when omitted
        """
        if grammar_file is None:
            grammar_file = str(GRAMMAR_FILE)
        self.settings = settings if settings is not None else DbcSettings.from_env()

        super().__init__(grammar_file, start_symbol, cache=self.settings.parser_cache)
        self.transformer = DbcTransformer()
        self.assembler = DocumentAssembler(self.transformer,
                                           strict_signals=self.settings.strict_signals)

    def decode(self, code: Union[str, bytes]) -> str:
        """Turn byte input into text using the configured encoding."""
        if isinstance(code, (bytes, bytearray)):
            try:
                return bytes(code).decode(self.settings.encoding)
            except UnicodeDecodeError as e:
                raise DbcEncodingError(self.settings.encoding, str(e))
        return code

    def parse(self, code: Union[str, bytes]) -> Tree:
        """
        Parse DBC text into a Lark tree.

        Raises:
            DbcSyntaxError: the grammar rejected the input
        """
        text = self.decode(code)
        try:
            return super().parse(text)
        except UnexpectedInput as e:
            raise DbcSyntaxError.from_lark(e, text) from e

    def parse_and_transform(self, code: Union[str, bytes]) -> DbcDocument:
        """
        Parse a complete DBC file into a DbcDocument.

        Raises:
            DbcSyntaxError: not even the first item could be parsed
            DbcIncompleteError: only a prefix parsed; carries the document and the rest
        """
        text = self.decode(code)
        try:
            tree = super().parse(text)
        except UnexpectedInput as e:
            document, remainder = self._recover_prefix(text, e)
            raise DbcIncompleteError(document, remainder) from DbcSyntaxError.from_lark(e, text)

        document = self.assembler.assemble(tree)
        logger.debug(f"Parsed DBC with {len(document.messages)} messages, "
                     f"{len(document.comments)} comments")
        return document

    def parse_partial(self, code: Union[str, bytes]) -> Tuple[DbcDocument, str]:
        """
        Parse as much of the input as forms a DBC file.

        Returns:
            (document, remainder); remainder is "" when everything was consumed

        Raises:
            DbcSyntaxError: not even the first item could be parsed
        """
        text = self.decode(code)
        try:
            tree = super().parse(text)
        except UnexpectedInput as e:
            return self._recover_prefix(text, e)
        return self.assembler.assemble(tree), ""

    def _recover_prefix(self, text: str, error: UnexpectedInput) -> Tuple[DbcDocument, str]:
        consumed = self._complete_prefix_length(text)
        if consumed == 0:
            raise DbcSyntaxError.from_lark(error, text) from error

        logger.debug(f"Input parsed up to offset {consumed} of {len(text)}")
        document = self.assembler.assemble(super().parse(text[:consumed]))
        return document, text[consumed:]

    def _complete_prefix_length(self, text: str) -> int:
        """Offset just past the last token after which the input was a complete file."""
        interactive = self.parse_interactive(text)
        consumed = 0
        previous = None
        try:
            # iter_parse yields each token before feeding it, so choices()
            # reflects the state right after `previous`
            for token in interactive.iter_parse():
                if previous is not None and END_OF_INPUT in interactive.choices():
                    consumed = previous.end_pos
                previous = token
        except UnexpectedInput as e:
            if previous is not None:
                failed = getattr(e, "token", None)
                # lexer errors happen after `previous` was accepted by the parser
                fed = failed is None or getattr(failed, "start_pos", None) != previous.start_pos
                if fed and END_OF_INPUT in interactive.choices():
                    consumed = previous.end_pos
        else:
            if previous is not None and END_OF_INPUT in interactive.choices():
                consumed = previous.end_pos
        return consumed


# ============================================================================
# TRANSFORMER
# ============================================================================

class DbcTransformer(DSLTransformer):
    """
    DBC transformer that inherits from the core DSLTransformer.
    Converts each grammar rule of a DBC parse tree into its IR value.
    """
    passthrough_errors = (DbcError,)

    def __init__(self):
        super().__init__()

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def version(self, args):
        """Transform VERSION"""
        items = _Children(args)
        text = _text(items.token("QUOTED_STR"))
        items.done()
        return Version(text)

    def new_symbols(self, args):
        """Transform the NS_ block"""
        items = _Children(args)
        # SYMBOL tokens carry the line break and indentation in front of the name
        symbols = tuple(Symbol(str(token).strip()) for token in items.tokens("SYMBOL"))
        items.done()
        return symbols

    def bit_timing(self, args):
        items = _Children(args)
        baudrates = tuple(Baudrate(_int(token)) for token in items.tokens("UINT"))
        items.done()
        return baudrates

    def nodes(self, args):
        items = _Children(args)
        names = _names(items.optional_token("NODE_LIST"))
        items.done()
        return tuple(Node(name) for name in names)

    # ------------------------------------------------------------------
    # Messages & signals
    # ------------------------------------------------------------------

    def message(self, args):
        """Transform a BO_ line (signals are attached by the assembler)"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        name = str(items.token("IDENT"))
        size = _int(items.token("UINT"))
        transmitter = items.optional_token("IDENT")
        items.done()
        return Message(
            message_id=message_id,
            name=name,
            size=size,
            transmitter=Transmitter.from_name(str(transmitter) if transmitter is not None else None),
        )

    def signal(self, args):
        """Transform an SG_ line"""
        items = _Children(args)
        name = str(items.token("IDENT"))
        indicator = items.optional_token("MULTIPLEXER_INDICATOR")
        start_bit = _int(items.token("UINT"))
        size = _int(items.token("UINT"))
        byte_order = _choice(ByteOrder, items.token("BYTE_ORDER"))
        value_type = _choice(ValueType, items.token("VALUE_TYPE"))
        factor = _float(items.token("NUMBER"))
        offset = _float(items.token("NUMBER"))
        minimum = _float(items.token("NUMBER"))
        maximum = _float(items.token("NUMBER"))
        unit = _text(items.token("QUOTED_STR"))
        receivers = items.optional_value(tuple) or ()
        items.done()

        if indicator is None:
            multiplexer_indicator = MultiplexIndicator.plain()
        else:
            multiplexer_indicator = MultiplexIndicator.parse(str(indicator))

        return Signal(
            name=name,
            multiplexer_indicator=multiplexer_indicator,
            start_bit=start_bit,
            size=size,
            byte_order=byte_order,
            value_type=value_type,
            factor=factor,
            offset=offset,
            minimum=minimum,
            maximum=maximum,
            unit=unit,
            receivers=receivers,
        )

    def receivers(self, args):
        # Vector__XXX means "no receiver"
        items = _Children(args)
        names = _names(items.token("RECEIVER_LIST"))
        items.done()
        return tuple(name for name in names if not is_vector_xxx(name))

    def message_transmitter(self, args):
        """Transform BO_TX_BU_"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        transmitters = tuple(Transmitter.from_name(str(token)) for token in items.tokens("IDENT"))
        items.done()
        return MessageTransmitter(message_id, transmitters)

    # ------------------------------------------------------------------
    # Value tables & descriptions
    # ------------------------------------------------------------------

    def val_description(self, args):
        items = _Children(args)
        value = _int(items.token("SIGNED_INT"))
        description = _text(items.token("QUOTED_STR"))
        items.done()
        return ValDescription(value, description)

    def value_table(self, args):
        """Transform VAL_TABLE_"""
        items = _Children(args)
        name = str(items.token("IDENT"))
        descriptions = tuple(items.values(ValDescription))
        items.done()
        return ValueTable(name, descriptions)

    def value_description(self, args):
        """Transform VAL_ for a signal or an environment variable"""
        items = _Children(args)
        message_id = items.optional_token("UINT")
        name = str(items.token("IDENT"))
        descriptions = tuple(items.values(ValDescription))
        items.done()
        if message_id is None:
            return EnvVarValueDescription(name, descriptions)
        return SignalValueDescription(_message_id(message_id), name, descriptions)

    # ------------------------------------------------------------------
    # Environment variables
    # ------------------------------------------------------------------

    def environment_variable(self, args):
        """Transform EV_"""
        items = _Children(args)
        name = str(items.token("IDENT"))
        env_type = _choice(EnvType, items.token("UINT"))
        minimum = _float(items.token("NUMBER"))
        maximum = _float(items.token("NUMBER"))
        unit = _text(items.token("QUOTED_STR"))
        initial_value = _float(items.token("NUMBER"))
        ev_id = _int(items.token("UINT"))
        access_type = _choice(AccessType, items.token("ACCESS_TYPE"))
        access_nodes = items.optional_value(tuple) or ()
        items.done()
        return EnvironmentVariable(
            name=name,
            env_type=env_type,
            minimum=minimum,
            maximum=maximum,
            unit=unit,
            initial_value=initial_value,
            ev_id=ev_id,
            access_type=access_type,
            access_nodes=access_nodes,
        )

    def access_nodes(self, args):
        items = _Children(args)
        nodes = tuple(AccessNode.from_name(str(token)) for token in items.tokens("IDENT"))
        items.done()
        return nodes

    def environment_variable_data(self, args):
        """Transform ENVVAR_DATA_"""
        items = _Children(args)
        name = str(items.token("IDENT"))
        size = _int(items.token("UINT"))
        items.done()
        return EnvironmentVariableData(name, size)

    # ------------------------------------------------------------------
    # Signal types, groups & multiplexing
    # ------------------------------------------------------------------

    def signal_type(self, args):
        """Transform an SGTYPE_ definition"""
        items = _Children(args)
        name = str(items.token("IDENT"))
        size = _int(items.token("UINT"))
        byte_order = _choice(ByteOrder, items.token("BYTE_ORDER"))
        value_type = _choice(ValueType, items.token("VALUE_TYPE"))
        factor = _float(items.token("NUMBER"))
        offset = _float(items.token("NUMBER"))
        minimum = _float(items.token("NUMBER"))
        maximum = _float(items.token("NUMBER"))
        unit = _text(items.token("QUOTED_STR"))
        default_value = _float(items.token("NUMBER"))
        value_table = str(items.token("IDENT"))
        items.done()
        return SignalType(name, size, byte_order, value_type, factor, offset,
                          minimum, maximum, unit, default_value, value_table)

    def signal_type_ref(self, args):
        """Transform an SGTYPE_ reference"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        signal_name = str(items.token("IDENT"))
        type_name = str(items.token("IDENT"))
        items.done()
        return SignalTypeRef(message_id, signal_name, type_name)

    def signal_group(self, args):
        """Transform SIG_GROUP_"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        name = str(items.token("IDENT"))
        repetitions = _int(items.token("UINT"))
        signal_names = tuple(str(token) for token in items.tokens("IDENT"))
        items.done()
        return SignalGroups(message_id, name, repetitions, signal_names)

    def signal_extended_value_type(self, args):
        """Transform SIG_VALTYPE_"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        signal_name = str(items.token("IDENT"))
        value_type = _choice(SignalExtendedValueType, items.token("UINT"))
        items.done()
        return SignalExtendedValueTypeList(message_id, signal_name, value_type)

    def value_range(self, args):
        items = _Children(args)
        minimum = _int(items.token("UINT"))
        maximum = _int(items.token("UINT"))
        items.done()
        return ExtendedMultiplexMapping(minimum, maximum)

    def extended_multiplex(self, args):
        """Transform SG_MUL_VAL_"""
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        signal_name = str(items.token("IDENT"))
        multiplexor_name = str(items.token("IDENT"))
        mappings = items.values(ExtendedMultiplexMapping)
        if not mappings:
            raise NoMoreRulesError("value_range")
        items.done()
        return ExtendedMultiplex(message_id, signal_name, multiplexor_name, tuple(mappings))

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def comment_node(self, args):
        items = _Children(args)
        fields = {"node_name": str(items.token("IDENT"))}
        items.done()
        return fields

    def comment_message(self, args):
        items = _Children(args)
        fields = {"message_id": _message_id(items.token("UINT"))}
        items.done()
        return fields

    def comment_signal(self, args):
        items = _Children(args)
        fields = {"message_id": _message_id(items.token("UINT"))}
        signal_name = items.optional_token("IDENT")
        if signal_name is not None:
            fields["signal_name"] = str(signal_name)
        items.done()
        return fields

    def comment_env_var(self, args):
        items = _Children(args)
        fields = {"env_var_name": str(items.token("IDENT"))}
        items.done()
        return fields

    def comment(self, args):
        """Transform CM_; None when neither a target nor text is present"""
        items = _Children(args)
        fields = items.optional_value(dict) or {}
        text = _text(items.token("QUOTED_STR"))
        items.done()
        return Comment.from_fields(text, **fields)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _bounded_type(self, kind: AttributeTypeKind, args) -> AttributeValueType:
        items = _Children(args)
        minimum = _number(items.token("NUMBER"))
        maximum = _number(items.token("NUMBER"))
        items.done()
        return AttributeValueType(kind, minimum, maximum)

    def int_value_type(self, args):
        return self._bounded_type(AttributeTypeKind.INT, args)

    def hex_value_type(self, args):
        return self._bounded_type(AttributeTypeKind.HEX, args)

    def float_value_type(self, args):
        return self._bounded_type(AttributeTypeKind.FLOAT, args)

    def string_value_type(self, args):
        _Children(args).done()
        return AttributeValueType(AttributeTypeKind.STRING)

    def enum_value_type(self, args):
        items = _Children(args)
        values = tuple(_text(token) for token in items.tokens("QUOTED_STR"))
        items.done()
        return AttributeValueType(AttributeTypeKind.ENUM, values=values)

    def attribute_definition(self, args):
        """Transform BA_DEF_"""
        items = _Children(args)
        object_type = items.optional_token("OBJECT_TYPE")
        name = _text(items.token("QUOTED_STR"))
        value_type = items.value(AttributeValueType, "attribute value type")
        items.done()
        if object_type is None:
            scope = AttributeObjectType.NETWORK
        else:
            scope = _choice(AttributeObjectType, object_type)
        return AttributeDefinition(name, scope, value_type)

    def attribute_definition_for_relation(self, args):
        """Transform BA_DEF_REL_"""
        items = _Children(args)
        object_type = items.optional_token("RELATION_TYPE")
        name = _text(items.token("QUOTED_STR"))
        value_type = items.value(AttributeValueType, "attribute value type")
        items.done()
        if object_type is None:
            scope = RelationObjectType.NETWORK
        else:
            scope = _choice(RelationObjectType, object_type)
        return RelationAttributeDefinition(name, scope, value_type)

    def attribute_value(self, args):
        items = _Children(args)
        string = items.optional_token("QUOTED_STR")
        if string is not None:
            value = AttributeValue.string(_text(string))
        else:
            value = _number(items.token("NUMBER"))
        items.done()
        return value

    def attribute_default(self, args):
        """Transform BA_DEF_DEF_"""
        items = _Children(args)
        name = _text(items.token("QUOTED_STR"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return AttributeDefault(name, value)

    def attribute_default_for_relation(self, args):
        """Transform BA_DEF_DEF_REL_"""
        items = _Children(args)
        name = _text(items.token("QUOTED_STR"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return RelationAttributeDefault(name, value)

    def network_node_attribute_value(self, args):
        items = _Children(args)
        node_name = str(items.token("IDENT"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return NetworkNodeAttributeValue(node_name, value)

    def message_attribute_value(self, args):
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        value = items.optional_value(AttributeValue)
        items.done()
        return MessageAttributeValue(message_id, value)

    def signal_attribute_value(self, args):
        items = _Children(args)
        message_id = _message_id(items.token("UINT"))
        signal_name = str(items.token("IDENT"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return SignalAttributeValue(message_id, signal_name, value)

    def env_var_attribute_value(self, args):
        items = _Children(args)
        env_var_name = str(items.token("IDENT"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return EnvVarAttributeValue(env_var_name, value)

    def attribute_value_for_object(self, args):
        """Transform BA_"""
        items = _Children(args)
        name = _text(items.token("QUOTED_STR"))
        target = items.value((AttributeValue, AttributeTarget), "attribute target")
        items.done()
        if isinstance(target, AttributeValue):
            target = RawAttributeValue(target)
        return AttributeValueForObject(name, target)

    def node_signal_relation(self, args):
        items = _Children(args)
        node_name = str(items.token("IDENT"))
        message_id = _message_id(items.token("UINT"))
        signal_name = str(items.token("IDENT"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return NodeSignalRelation(node_name, message_id, signal_name, value)

    def node_message_relation(self, args):
        items = _Children(args)
        node_name = str(items.token("IDENT"))
        message_id = _message_id(items.token("UINT"))
        value = items.value(AttributeValue, "attribute_value")
        items.done()
        return NodeMessageRelation(node_name, message_id, value)

    def node_env_var_relation(self, args):
        raise RuleNotImplementedError("BU_EV_REL_ attribute value")

    def attribute_value_for_relation(self, args):
        """Transform BA_REL_"""
        items = _Children(args)
        name = _text(items.token("QUOTED_STR"))
        target = items.value(RelationTarget, "relation target")
        items.done()
        return RelationAttributeValue(name, target)


# Convenience functions
def parse_dbc(content: Union[str, bytes], settings: Optional[DbcSettings] = None) -> DbcDocument:
    """
    Convenience function to parse a complete DBC file.

    Args:
        content: DBC text, or raw bytes decoded with the configured encoding
        settings: Parser settings (defaults to the environment)

    Returns:
        Parsed DbcDocument

    Raises:
        DbcSyntaxError: the input is not DBC
        DbcIncompleteError: trailing input could not be parsed
    """
    parser = DbcParser(settings=settings)
    return parser.parse_and_transform(content)


def parse_dbc_partial(content: Union[str, bytes],
                      settings: Optional[DbcSettings] = None) -> Tuple[DbcDocument, str]:
    """
    Convenience function to parse the longest valid prefix of a DBC file.

    Args:
        content: DBC text, or raw bytes decoded with the configured encoding
        settings: Parser settings (defaults to the environment)

    Returns:
        (document, unparsed remainder)
    """
    parser = DbcParser(settings=settings)
    return parser.parse_partial(content)

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

"""
DBC Intermediate Representation (IR)

Value types for every construct of a CAN database (DBC) file. Each type is a
frozen dataclass (or an Enum for payload-free choices) and knows how to render
itself back to canonical DBC text through `to_dbc()`. Construction from the
parse tree lives in the transformer (dbc_parser.py); the aggregate document
lives in dbc_document.py.

Quoted strings are stored exactly as they appear between the quotes, escapes
included, so rendering only has to put the quotes back.
"""

VECTOR_XXX = "Vector__XXX"

# Spellings of "no node" found across DBC dialects
VECTOR_XXX_NAMES = frozenset({"Vector__XXX", "VECTOR__XXX", "VectorXXX", "VECTOR_XXX"})

EXTENDED_ID_FLAG = 1 << 31
EXTENDED_ID_MASK = 0x1FFFFFFF
STANDARD_ID_MASK = 0xFFFF

U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def is_vector_xxx(name: Optional[str]) -> bool:
    """True for names meaning "no node" (including a missing name)."""
    return not name or name in VECTOR_XXX_NAMES


def format_number(value: float) -> str:
    """Render a float the way DBC writers do: integral values without a fraction."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def quoted(text: str) -> str:
    return f'"{text}"'


# ============================================================================
# IDENTIFIERS & NODES
# ============================================================================

@dataclass(frozen=True)
class MessageId:
    """CAN identifier: 11-bit standard or 29-bit extended"""
    value: int
    is_extended: bool = False

    @classmethod
    def standard(cls, value: int) -> "MessageId":
        return cls(value, False)

    @classmethod
    def extended(cls, value: int) -> "MessageId":
        return cls(value, True)

    @classmethod
    def from_raw(cls, raw: int) -> "MessageId":
        """Decode the wire form: bit 31 marks an extended identifier."""
        if raw & EXTENDED_ID_FLAG:
            return cls(raw & EXTENDED_ID_MASK, True)
        return cls(raw & STANDARD_ID_MASK, False)

    def raw(self) -> int:
        if self.is_extended:
            return self.value | EXTENDED_ID_FLAG
        return self.value

    def to_dbc(self) -> str:
        return str(self.raw())

    def validate(self) -> None:
        limit = EXTENDED_ID_MASK if self.is_extended else STANDARD_ID_MASK
        if not 0 <= self.value <= limit:
            kind = "extended" if self.is_extended else "standard"
            raise ValueError(f"{kind} message id out of range: {self.value:#x}")

    def __str__(self) -> str:
        if self.is_extended:
            return f"Extended({self.value:#x})"
        return f"Standard({self.value:#x})"


@dataclass(frozen=True)
class Version:
    """Opaque VERSION string"""
    text: str = ""

    def to_dbc(self) -> str:
        return f"VERSION {quoted(self.text)}"


@dataclass(frozen=True)
class Symbol:
    """Entry of the NS_ (new symbols) block"""
    name: str

    def to_dbc(self) -> str:
        return f"\t{self.name}"


@dataclass(frozen=True)
class Baudrate:
    value: int

    def to_dbc(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Node:
    """Network participant declared in BU_"""
    name: str

    def to_dbc(self) -> str:
        return self.name


@dataclass(frozen=True)
class NodeRef:
    """A node name where Vector__XXX stands for "nobody"; held as None."""
    node_name: Optional[str] = None

    @classmethod
    def from_name(cls, name: Optional[str]):
        return cls(None if is_vector_xxx(name) else name)

    @property
    def is_vector_xxx(self) -> bool:
        return self.node_name is None

    def to_dbc(self) -> str:
        return VECTOR_XXX if self.node_name is None else self.node_name


@dataclass(frozen=True)
class Transmitter(NodeRef):
    """Sending node of a message"""


@dataclass(frozen=True)
class AccessNode(NodeRef):
    """Node allowed to access an environment variable"""


# ============================================================================
# MESSAGES & SIGNALS
# ============================================================================

class ByteOrder(Enum):
    """Bit layout; the values are the DBC characters (note '0' is big endian)"""
    LITTLE_ENDIAN = "1"
    BIG_ENDIAN = "0"


class ValueType(Enum):
    SIGNED = "-"
    UNSIGNED = "+"


class MultiplexKind(Enum):
    PLAIN = "plain"
    MULTIPLEXOR = "multiplexor"
    MULTIPLEXED_SIGNAL = "multiplexed_signal"
    MULTIPLEXOR_AND_MULTIPLEXED_SIGNAL = "multiplexor_and_multiplexed_signal"


_MULTIPLEXED = re.compile(r"m(\d+)(M?)")


@dataclass(frozen=True)
class MultiplexIndicator:
    """Role of a signal in (extended) multiplexing"""
    kind: MultiplexKind = MultiplexKind.PLAIN
    switch_value: Optional[int] = None

    @classmethod
    def plain(cls) -> "MultiplexIndicator":
        return cls()

    @classmethod
    def multiplexor(cls) -> "MultiplexIndicator":
        return cls(MultiplexKind.MULTIPLEXOR)

    @classmethod
    def multiplexed(cls, switch_value: int) -> "MultiplexIndicator":
        return cls(MultiplexKind.MULTIPLEXED_SIGNAL, switch_value)

    @classmethod
    def multiplexor_and_multiplexed(cls, switch_value: int) -> "MultiplexIndicator":
        return cls(MultiplexKind.MULTIPLEXOR_AND_MULTIPLEXED_SIGNAL, switch_value)

    @classmethod
    def parse(cls, text: str) -> "MultiplexIndicator":
        """
        Classify an indicator token: "M", "m<n>" or "m<n>M".
        Anything else is accepted as a plain signal.
        """
        if text == "M":
            return cls.multiplexor()
        match = _MULTIPLEXED.fullmatch(text)
        if match is None:
            return cls.plain()
        if match.group(2):
            return cls.multiplexor_and_multiplexed(int(match.group(1)))
        return cls.multiplexed(int(match.group(1)))

    def to_dbc(self) -> str:
        if self.kind is MultiplexKind.MULTIPLEXOR:
            return "M"
        if self.kind is MultiplexKind.MULTIPLEXED_SIGNAL:
            return f"m{self.switch_value}"
        if self.kind is MultiplexKind.MULTIPLEXOR_AND_MULTIPLEXED_SIGNAL:
            return f"m{self.switch_value}M"
        return ""


@dataclass(frozen=True)
class Signal:
    """SG_ line: a bit field inside the payload of the message it follows"""
    name: str
    multiplexer_indicator: MultiplexIndicator
    start_bit: int
    size: int
    byte_order: ByteOrder
    value_type: ValueType
    factor: float
    offset: float
    minimum: float
    maximum: float
    unit: str
    receivers: Tuple[str, ...] = ()

    def to_dbc(self) -> str:
        name = self.name
        indicator = self.multiplexer_indicator.to_dbc()
        if indicator:
            name = f"{name} {indicator}"
        receivers = ",".join(self.receivers) or VECTOR_XXX
        return (f"SG_ {name} : {self.start_bit}|{self.size}@"
                f"{self.byte_order.value}{self.value_type.value} "
                f"({format_number(self.factor)},{format_number(self.offset)}) "
                f"[{format_number(self.minimum)}|{format_number(self.maximum)}] "
                f"{quoted(self.unit)} {receivers}")

    def validate(self) -> None:
        if self.start_bit < 0:
            raise ValueError(f"Signal {self.name}: start bit must be non-negative")
        if not 0 <= self.size <= 64:
            raise ValueError(f"Signal {self.name}: size must be within 0..64, got {self.size}")


@dataclass(frozen=True)
class Message:
    """BO_ line together with the signals declared under it"""
    message_id: MessageId
    name: str
    size: int
    transmitter: Transmitter
    signals: Tuple[Signal, ...] = ()

    def signal(self, name: str) -> Optional[Signal]:
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None

    def to_dbc(self) -> str:
        header = (f"BO_ {self.message_id.to_dbc()} {self.name}: {self.size} "
                  f"{self.transmitter.to_dbc()}")
        return header + "".join(f"\n {signal.to_dbc()}" for signal in self.signals)

    def validate(self) -> None:
        self.message_id.validate()
        if self.size < 0:
            raise ValueError(f"Message {self.name}: size must be non-negative")
        for signal in self.signals:
            signal.validate()


@dataclass(frozen=True)
class MessageTransmitter:
    """BO_TX_BU_: additional transmitters of a message"""
    message_id: MessageId
    transmitters: Tuple[Transmitter, ...] = ()

    def to_dbc(self) -> str:
        names = ",".join(t.to_dbc() for t in self.transmitters)
        return f"BO_TX_BU_ {self.message_id.to_dbc()} : {names};"


# ============================================================================
# VALUE TABLES & DESCRIPTIONS
# ============================================================================

@dataclass(frozen=True)
class ValDescription:
    """One (raw value, label) pair"""
    id: int
    description: str

    def to_dbc(self) -> str:
        return f"{self.id} {quoted(self.description)}"


def _descriptions_to_dbc(descriptions: Tuple[ValDescription, ...]) -> str:
    return "".join(f" {d.to_dbc()}" for d in descriptions)


@dataclass(frozen=True)
class ValueTable:
    """VAL_TABLE_: globally named value labels"""
    name: str
    descriptions: Tuple[ValDescription, ...] = ()

    def to_dbc(self) -> str:
        return f"VAL_TABLE_ {self.name}{_descriptions_to_dbc(self.descriptions)};"


class ValueDescription:
    """VAL_ entry; see SignalValueDescription and EnvVarValueDescription"""

    def to_dbc(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class SignalValueDescription(ValueDescription):
    message_id: MessageId
    signal_name: str
    descriptions: Tuple[ValDescription, ...] = ()

    def to_dbc(self) -> str:
        return (f"VAL_ {self.message_id.to_dbc()} {self.signal_name}"
                f"{_descriptions_to_dbc(self.descriptions)};")


@dataclass(frozen=True)
class EnvVarValueDescription(ValueDescription):
    env_var_name: str
    descriptions: Tuple[ValDescription, ...] = ()

    def to_dbc(self) -> str:
        return f"VAL_ {self.env_var_name}{_descriptions_to_dbc(self.descriptions)};"


# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

class EnvType(Enum):
    INTEGER = "0"
    FLOAT = "1"
    STRING = "2"


class AccessType(Enum):
    DUMMY_NODE_VECTOR0 = "DUMMY_NODE_VECTOR0"
    DUMMY_NODE_VECTOR1 = "DUMMY_NODE_VECTOR1"
    DUMMY_NODE_VECTOR2 = "DUMMY_NODE_VECTOR2"
    DUMMY_NODE_VECTOR3 = "DUMMY_NODE_VECTOR3"


@dataclass(frozen=True)
class EnvironmentVariable:
    """EV_: a named value living outside any message"""
    name: str
    env_type: EnvType
    minimum: float
    maximum: float
    unit: str
    initial_value: float
    ev_id: int
    access_type: AccessType
    access_nodes: Tuple[AccessNode, ...] = ()

    def to_dbc(self) -> str:
        text = (f"EV_ {self.name}: {self.env_type.value} "
                f"[{format_number(self.minimum)}|{format_number(self.maximum)}] "
                f"{quoted(self.unit)} {format_number(self.initial_value)} {self.ev_id} "
                f"{self.access_type.value}")
        if self.access_nodes:
            text += " " + ",".join(node.to_dbc() for node in self.access_nodes)
        return text + ";"


@dataclass(frozen=True)
class EnvironmentVariableData:
    """ENVVAR_DATA_: byte size of a data environment variable"""
    env_var_name: str
    data_size: int

    def to_dbc(self) -> str:
        return f"ENVVAR_DATA_ {self.env_var_name}: {self.data_size};"


# ============================================================================
# SIGNAL TYPES & GROUPS
# ============================================================================

@dataclass(frozen=True)
class SignalType:
    """SGTYPE_ definition: a reusable signal layout"""
    name: str
    size: int
    byte_order: ByteOrder
    value_type: ValueType
    factor: float
    offset: float
    minimum: float
    maximum: float
    unit: str
    default_value: float
    value_table: str

    def to_dbc(self) -> str:
        return (f"SGTYPE_ {self.name}: {self.size}@{self.byte_order.value}{self.value_type.value} "
                f"({format_number(self.factor)},{format_number(self.offset)}) "
                f"[{format_number(self.minimum)}|{format_number(self.maximum)}] "
                f"{quoted(self.unit)} {format_number(self.default_value)}, {self.value_table};")


@dataclass(frozen=True)
class SignalTypeRef:
    """SGTYPE_ reference binding a message signal to a signal type"""
    message_id: MessageId
    signal_name: str
    signal_type_name: str

    def to_dbc(self) -> str:
        return f"SGTYPE_ {self.message_id.to_dbc()} {self.signal_name} : {self.signal_type_name};"


@dataclass(frozen=True)
class SignalGroups:
    message_id: MessageId
    signal_group_name: str
    repetitions: int
    signal_names: Tuple[str, ...] = ()

    def to_dbc(self) -> str:
        names = "".join(f" {name}" for name in self.signal_names)
        return (f"SIG_GROUP_ {self.message_id.to_dbc()} {self.signal_group_name} "
                f"{self.repetitions} :{names};")


class SignalExtendedValueType(Enum):
    SIGNED_OR_UNSIGNED_INTEGER = "0"
    IEEE_FLOAT_32BIT = "1"
    IEEE_DOUBLE_64BIT = "2"


@dataclass(frozen=True)
class SignalExtendedValueTypeList:
    """SIG_VALTYPE_: marks a signal as float/double instead of integer"""
    message_id: MessageId
    signal_name: str
    signal_extended_value_type: SignalExtendedValueType

    def to_dbc(self) -> str:
        return (f"SIG_VALTYPE_ {self.message_id.to_dbc()} {self.signal_name} : "
                f"{self.signal_extended_value_type.value};")


@dataclass(frozen=True)
class ExtendedMultiplexMapping:
    """Inclusive range of multiplexor values"""
    min_value: int
    max_value: int

    def to_dbc(self) -> str:
        return f"{self.min_value}-{self.max_value}"


@dataclass(frozen=True)
class ExtendedMultiplex:
    """SG_MUL_VAL_: switch ranges under which a multiplexed signal is active"""
    message_id: MessageId
    signal_name: str
    multiplexor_signal_name: str
    mappings: Tuple[ExtendedMultiplexMapping, ...] = ()

    def to_dbc(self) -> str:
        ranges = ", ".join(m.to_dbc() for m in self.mappings)
        return (f"SG_MUL_VAL_ {self.message_id.to_dbc()} {self.signal_name} "
                f"{self.multiplexor_signal_name} {ranges};")


# ============================================================================
# COMMENTS
# ============================================================================

class Comment:
    """CM_ entry; one subclass per comment target"""

    def to_dbc(self) -> str:
        raise NotImplementedError

    @staticmethod
    def from_fields(comment: str,
                    message_id: Optional[MessageId] = None,
                    signal_name: Optional[str] = None,
                    node_name: Optional[str] = None,
                    env_var_name: Optional[str] = None) -> Optional["Comment"]:
        """
        Pick the comment variant from whichever target fields were present.

        Precedence: signal (id and name), message (id only), node, env var,
        untargeted text. Returns None for untargeted empty text.
        """
        if message_id is not None and signal_name is not None:
            return SignalComment(message_id, signal_name, comment)
        if message_id is not None:
            return MessageComment(message_id, comment)
        if node_name is not None:
            return NodeComment(node_name, comment)
        if env_var_name is not None:
            return EnvVarComment(env_var_name, comment)
        if comment:
            return PlainComment(comment)
        return None


@dataclass(frozen=True)
class NodeComment(Comment):
    node_name: str
    comment: str

    def to_dbc(self) -> str:
        return f"CM_ BU_ {self.node_name} {quoted(self.comment)};"


@dataclass(frozen=True)
class MessageComment(Comment):
    message_id: MessageId
    comment: str

    def to_dbc(self) -> str:
        return f"CM_ BO_ {self.message_id.to_dbc()} {quoted(self.comment)};"


@dataclass(frozen=True)
class SignalComment(Comment):
    message_id: MessageId
    signal_name: str
    comment: str

    def to_dbc(self) -> str:
        return f"CM_ SG_ {self.message_id.to_dbc()} {self.signal_name} {quoted(self.comment)};"


@dataclass(frozen=True)
class EnvVarComment(Comment):
    env_var_name: str
    comment: str

    def to_dbc(self) -> str:
        return f"CM_ EV_ {self.env_var_name} {quoted(self.comment)};"


@dataclass(frozen=True)
class PlainComment(Comment):
    comment: str

    def to_dbc(self) -> str:
        return f"CM_ {quoted(self.comment)};"


# ============================================================================
# ATTRIBUTES
# ============================================================================

class AttributeValueKind(Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    DOUBLE = "double"
    STRING = "string"


def _try_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class AttributeValue:
    """Attribute literal: unsigned, signed, double or string"""
    kind: AttributeValueKind
    value: Union[int, float, str]

    @classmethod
    def unsigned(cls, value: int) -> "AttributeValue":
        return cls(AttributeValueKind.UNSIGNED, value)

    @classmethod
    def signed(cls, value: int) -> "AttributeValue":
        return cls(AttributeValueKind.SIGNED, value)

    @classmethod
    def double(cls, value: float) -> "AttributeValue":
        return cls(AttributeValueKind.DOUBLE, float(value))

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        return cls(AttributeValueKind.STRING, value)

    @classmethod
    def parse_number(cls, text: str) -> "AttributeValue":
        """
        Infer the variant of a bare numeric token.

        Tried in order: unsigned 64-bit, signed 64-bit, double. The order decides
        the variant ("12" is unsigned, "-12" signed, "12.0" double).
        Raises ValueError when the text is not a number at all.
        """
        number = _try_int(text)
        if number is not None:
            if not text.startswith("-") and 0 <= number <= U64_MAX:
                return cls.unsigned(number)
            if I64_MIN <= number <= I64_MAX:
                return cls.signed(number)
        return cls.double(float(text))

    def to_dbc(self) -> str:
        if self.kind is AttributeValueKind.STRING:
            return quoted(self.value)
        if self.kind is AttributeValueKind.DOUBLE:
            return repr(self.value)
        if self.kind is AttributeValueKind.SIGNED and self.value == 0:
            # "-0" is the only way to spell a signed zero
            return "-0"
        return str(self.value)


class AttributeTypeKind(Enum):
    INT = "INT"
    HEX = "HEX"
    FLOAT = "FLOAT"
    STRING = "STRING"
    ENUM = "ENUM"


@dataclass(frozen=True)
class AttributeValueType:
    """Declared type of an attribute: bounded INT/HEX/FLOAT, STRING or ENUM"""
    kind: AttributeTypeKind
    minimum: Optional[AttributeValue] = None
    maximum: Optional[AttributeValue] = None
    values: Tuple[str, ...] = ()

    def to_dbc(self) -> str:
        if self.kind is AttributeTypeKind.ENUM:
            if not self.values:
                return "ENUM"
            return "ENUM " + ",".join(quoted(v) for v in self.values)
        if self.kind is AttributeTypeKind.STRING:
            return "STRING"
        return f"{self.kind.value} {self.minimum.to_dbc()} {self.maximum.to_dbc()}"


class AttributeObjectType(Enum):
    """Object kind an attribute definition applies to ("" is network-wide)"""
    NETWORK = ""
    NODE = "BU_"
    MESSAGE = "BO_"
    SIGNAL = "SG_"
    ENV_VAR = "EV_"


class RelationObjectType(Enum):
    NETWORK = ""
    NODE_SIGNAL = "BU_SG_REL_"
    NODE_MESSAGE = "BU_BO_REL_"
    NODE_ENV_VAR = "BU_EV_REL_"


def _scoped(keyword: str, scope: str) -> str:
    return f"{keyword} {scope} " if scope else f"{keyword} "


@dataclass(frozen=True)
class AttributeDefinition:
    """BA_DEF_"""
    name: str
    object_type: AttributeObjectType
    value_type: AttributeValueType

    def to_dbc(self) -> str:
        return (f"{_scoped('BA_DEF_', self.object_type.value)}{quoted(self.name)} "
                f"{self.value_type.to_dbc()};")


@dataclass(frozen=True)
class RelationAttributeDefinition:
    """BA_DEF_REL_"""
    name: str
    object_type: RelationObjectType
    value_type: AttributeValueType

    def to_dbc(self) -> str:
        return (f"{_scoped('BA_DEF_REL_', self.object_type.value)}{quoted(self.name)} "
                f"{self.value_type.to_dbc()};")


@dataclass(frozen=True)
class AttributeDefault:
    """BA_DEF_DEF_"""
    name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"BA_DEF_DEF_ {quoted(self.name)} {self.value.to_dbc()};"


@dataclass(frozen=True)
class RelationAttributeDefault:
    """BA_DEF_DEF_REL_"""
    name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"BA_DEF_DEF_REL_ {quoted(self.name)} {self.value.to_dbc()};"


class AttributeTarget:
    """Object a BA_ value is attached to"""

    def to_dbc(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class RawAttributeValue(AttributeTarget):
    value: AttributeValue

    def to_dbc(self) -> str:
        return self.value.to_dbc()


@dataclass(frozen=True)
class NetworkNodeAttributeValue(AttributeTarget):
    node_name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"BU_ {self.node_name} {self.value.to_dbc()}"


@dataclass(frozen=True)
class MessageAttributeValue(AttributeTarget):
    message_id: MessageId
    value: Optional[AttributeValue] = None

    def to_dbc(self) -> str:
        if self.value is None:
            return f"BO_ {self.message_id.to_dbc()}"
        return f"BO_ {self.message_id.to_dbc()} {self.value.to_dbc()}"


@dataclass(frozen=True)
class SignalAttributeValue(AttributeTarget):
    message_id: MessageId
    signal_name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"SG_ {self.message_id.to_dbc()} {self.signal_name} {self.value.to_dbc()}"


@dataclass(frozen=True)
class EnvVarAttributeValue(AttributeTarget):
    env_var_name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"EV_ {self.env_var_name} {self.value.to_dbc()}"


@dataclass(frozen=True)
class AttributeValueForObject:
    """BA_"""
    name: str
    target: AttributeTarget

    def to_dbc(self) -> str:
        return f"BA_ {quoted(self.name)} {self.target.to_dbc()};"


class RelationTarget:
    """Node/object pair a BA_REL_ value is attached to"""

    def to_dbc(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class NodeSignalRelation(RelationTarget):
    node_name: str
    message_id: MessageId
    signal_name: str
    value: AttributeValue

    def to_dbc(self) -> str:
        return (f"BU_SG_REL_ {self.node_name} SG_ {self.message_id.to_dbc()} "
                f"{self.signal_name} {self.value.to_dbc()}")


@dataclass(frozen=True)
class NodeMessageRelation(RelationTarget):
    node_name: str
    message_id: MessageId
    value: AttributeValue

    def to_dbc(self) -> str:
        return f"BU_BO_REL_ {self.node_name} {self.message_id.to_dbc()} {self.value.to_dbc()}"


@dataclass(frozen=True)
class RelationAttributeValue:
    """BA_REL_"""
    name: str
    target: RelationTarget

    def to_dbc(self) -> str:
        return f"BA_REL_ {quoted(self.name)} {self.target.to_dbc()};"

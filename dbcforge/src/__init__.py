"""
DbcForge Source Package

This package contains the source code for DbcForge, including the DBC grammar,
parser, IR definitions, document model, generator, compiler and signal codec.
"""

from .dbc_parser import (
    DbcParser,
    DbcTransformer,
    parse_dbc,
    parse_dbc_partial
)

from .dbc_assembler import DocumentAssembler

from .dbc_compiler import (
    DbcCompiler,
    compile_dbc
)

from .dbc_generator import (
    generate_dbc,
    generate_header,
    generate_sections
)

from .dbc_document import DbcDocument

from .dbc_ir import (
    MessageId,
    Version,
    Symbol,
    Baudrate,
    Node,
    Transmitter,
    AccessNode,
    ByteOrder,
    ValueType,
    MultiplexKind,
    MultiplexIndicator,
    Signal,
    Message,
    MessageTransmitter,
    ValDescription,
    ValueTable,
    ValueDescription,
    SignalValueDescription,
    EnvVarValueDescription,
    EnvType,
    AccessType,
    EnvironmentVariable,
    EnvironmentVariableData,
    SignalType,
    SignalTypeRef,
    SignalGroups,
    SignalExtendedValueType,
    SignalExtendedValueTypeList,
    ExtendedMultiplexMapping,
    ExtendedMultiplex,
    Comment,
    NodeComment,
    MessageComment,
    SignalComment,
    EnvVarComment,
    PlainComment,
    AttributeValueKind,
    AttributeValue,
    AttributeTypeKind,
    AttributeValueType,
    AttributeObjectType,
    RelationObjectType,
    AttributeDefinition,
    RelationAttributeDefinition,
    AttributeDefault,
    RelationAttributeDefault,
    AttributeTarget,
    RawAttributeValue,
    NetworkNodeAttributeValue,
    MessageAttributeValue,
    SignalAttributeValue,
    EnvVarAttributeValue,
    AttributeValueForObject,
    RelationTarget,
    NodeSignalRelation,
    NodeMessageRelation,
    RelationAttributeValue
)

from .dbc_codec import (
    SignalValue,
    decode_signal,
    encode_signal,
    decode_value,
    to_physical,
    to_signed
)

from .dbc_config import DbcSettings

from .dbc_errors import (
    DbcError,
    DbcSyntaxError,
    DbcIncompleteError,
    DbcEncodingError,
    DbcStructureError,
    ExpectedRuleError,
    NoMoreRulesError,
    UnknownRuleError,
    ExpectedEmptyError,
    InvalidNumericValueError,
    InvalidDataError,
    RuleNotImplementedError,
    OrphanSignalError,
    MultipleMultiplexorsError
)

__version__ = "1.0.0"

__all__ = [
    # Parser
    "DbcParser",
    "DbcTransformer",
    "DocumentAssembler",
    "parse_dbc",
    "parse_dbc_partial",

    # Compiler & generator
    "DbcCompiler",
    "compile_dbc",
    "generate_dbc",
    "generate_header",
    "generate_sections",

    # Document
    "DbcDocument",

    # Core data structures
    "MessageId",
    "Version",
    "Symbol",
    "Baudrate",
    "Node",
    "Transmitter",
    "AccessNode",
    "ByteOrder",
    "ValueType",
    "MultiplexKind",
    "MultiplexIndicator",
    "Signal",
    "Message",
    "MessageTransmitter",
    "ValDescription",
    "ValueTable",
    "ValueDescription",
    "SignalValueDescription",
    "EnvVarValueDescription",
    "EnvType",
    "AccessType",
    "EnvironmentVariable",
    "EnvironmentVariableData",
    "SignalType",
    "SignalTypeRef",
    "SignalGroups",
    "SignalExtendedValueType",
    "SignalExtendedValueTypeList",
    "ExtendedMultiplexMapping",
    "ExtendedMultiplex",

    # Comments
    "Comment",
    "NodeComment",
    "MessageComment",
    "SignalComment",
    "EnvVarComment",
    "PlainComment",

    # Attributes
    "AttributeValueKind",
    "AttributeValue",
    "AttributeTypeKind",
    "AttributeValueType",
    "AttributeObjectType",
    "RelationObjectType",
    "AttributeDefinition",
    "RelationAttributeDefinition",
    "AttributeDefault",
    "RelationAttributeDefault",
    "AttributeTarget",
    "RawAttributeValue",
    "NetworkNodeAttributeValue",
    "MessageAttributeValue",
    "SignalAttributeValue",
    "EnvVarAttributeValue",
    "AttributeValueForObject",
    "RelationTarget",
    "NodeSignalRelation",
    "NodeMessageRelation",
    "RelationAttributeValue",

    # Signal codec
    "SignalValue",
    "decode_signal",
    "encode_signal",
    "decode_value",
    "to_physical",
    "to_signed",

    # Configuration
    "DbcSettings",

    # Errors
    "DbcError",
    "DbcSyntaxError",
    "DbcIncompleteError",
    "DbcEncodingError",
    "DbcStructureError",
    "ExpectedRuleError",
    "NoMoreRulesError",
    "UnknownRuleError",
    "ExpectedEmptyError",
    "InvalidNumericValueError",
    "InvalidDataError",
    "RuleNotImplementedError",
    "OrphanSignalError",
    "MultipleMultiplexorsError",
]

"""
DBC error hierarchy

Every failure surfaced by the parser, the assembler and the document lookups
derives from `DbcError`:

- `DbcSyntaxError`      the grammar rejected the input at a position
- `DbcIncompleteError`  only a prefix of the input formed a DBC file
- `DbcStructureError`   a parse-tree node had the wrong shape for its rule
- `OrphanSignalError`   a signal appeared before any message (strict mode)
- `MultipleMultiplexorsError`  simple multiplexor lookup on an extended-mux message
- `DbcEncodingError`    byte input could not be decoded
"""

from typing import Any, Iterable, Optional


class DbcError(Exception):
    """Base class for all DBC errors"""


# ============================================================================
# PARSE OUTCOMES
# ============================================================================

class DbcSyntaxError(DbcError):
    """The input does not match any production at the given position."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None,
                 expected: Iterable[str] = (), context: str = ""):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.expected = sorted(expected)
        self.context = context

    @classmethod
    def from_lark(cls, exc, text: str) -> "DbcSyntaxError":
        """Build from a Lark `UnexpectedInput` raised while parsing `text`."""
        expected = getattr(exc, "expected", None) or getattr(exc, "allowed", None) or ()
        line = getattr(exc, "line", None)
        column = getattr(exc, "column", None)
        try:
            context = exc.get_context(text)
        except (AttributeError, IndexError, TypeError):
            context = ""
        if line is None or line < 0:
            message = "Unexpected end of input"
        else:
            message = f"Unexpected input at line {line}, column {column}"
        if expected:
            message += f"; expected one of: {', '.join(sorted(expected))}"
        return cls(message, line=line, column=column, expected=expected, context=context)


class DbcIncompleteError(DbcError):
    """Only a strict prefix of the input parsed.

    Carries the document built from that prefix and the unconsumed text.
    """

    def __init__(self, document: Any, remainder: str):
        super().__init__(f"Parsing stopped with {len(remainder)} characters left unparsed")
        self.document = document
        self.remainder = remainder


class DbcEncodingError(DbcError):
    """Byte input could not be decoded with the configured encoding."""

    def __init__(self, encoding: str, reason: str):
        super().__init__(f"Cannot decode DBC input as {encoding}: {reason}")
        self.encoding = encoding


# ============================================================================
# PARSE-TREE SHAPE ERRORS
# ============================================================================

class DbcStructureError(DbcError):
    """A parse-tree node did not have the shape its rule promises."""


class ExpectedRuleError(DbcStructureError):
    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class NoMoreRulesError(DbcStructureError):
    def __init__(self, expected: str):
        super().__init__(f"Expected {expected}, but no more children are left")
        self.expected = expected


class UnknownRuleError(DbcStructureError):
    def __init__(self, rule: str):
        super().__init__(f"Unknown rule: {rule}")
        self.rule = rule


class ExpectedEmptyError(DbcStructureError):
    def __init__(self, found: str):
        super().__init__(f"Expected no further children, found {found}")
        self.found = found


class InvalidNumericValueError(DbcStructureError):
    def __init__(self, text: str):
        super().__init__(f"Invalid numeric value: {text!r}")
        self.text = text


class InvalidDataError(DbcStructureError):
    def __init__(self, text: str, reason: str = ""):
        message = f"Invalid data: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.text = text


class RuleNotImplementedError(DbcStructureError):
    def __init__(self, rule: str):
        super().__init__(f"Rule is not supported yet: {rule}")
        self.rule = rule


# ============================================================================
# ASSEMBLY AND QUERY ERRORS
# ============================================================================

class OrphanSignalError(DbcError):
    """A signal line appeared before any message line."""

    def __init__(self, signal_name: str, line: Optional[int] = None):
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"Signal {signal_name!r}{where} does not follow a message")
        self.signal_name = signal_name
        self.line = line


class MultipleMultiplexorsError(DbcError):
    """The message uses extended multiplexing, so it has no single switch signal."""

    def __init__(self, message_id: Any):
        super().__init__(f"Message {message_id} uses extended multiplexing; "
                         "there is no single multiplexor switch")
        self.message_id = message_id

"""
Signal codec

Moves the raw value of a signal in and out of a CAN frame payload, one bit at a
time. Little endian (Intel) signals occupy consecutive bits from `start_bit`
upward. Big endian (Motorola) signals start at their most significant bit and
walk down each byte, continuing at bit 7 of the following byte.

The codec trusts its inputs: a payload too short for the signal layout raises
IndexError.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from .dbc_ir import ByteOrder, Signal, U64_MAX, ValueType, format_number


def _bit_positions(signal: Signal) -> Iterator[Tuple[int, int]]:
    """Yield (payload bit, value bit) pairs covering the signal."""
    if signal.byte_order is ByteOrder.LITTLE_ENDIAN:
        for index in range(signal.size):
            yield signal.start_bit + index, index
        return

    payload_bit = signal.start_bit
    for value_bit in range(signal.size - 1, -1, -1):
        yield payload_bit, value_bit
        if payload_bit % 8 == 0:
            payload_bit += 15
        else:
            payload_bit -= 1


def decode_signal(signal: Signal, data: Sequence[int]) -> int:
    """
    Extract the raw value of `signal` from a payload.

    Args:
        signal: Signal layout
        data: Frame payload (bytes, bytearray or a list of byte values)

    Returns:
        Raw value as an unsigned 64-bit integer. Signed signals with the sign
        bit set are sign-extended to 64 bits.
    """
    if signal.size == 0:
        return 0

    result = 0
    for payload_bit, value_bit in _bit_positions(signal):
        if data[payload_bit // 8] & (1 << (payload_bit % 8)):
            result |= 1 << value_bit

    if signal.value_type is ValueType.SIGNED and result & (1 << (signal.size - 1)):
        result |= U64_MAX ^ ((1 << signal.size) - 1)
    return result


def encode_signal(signal: Signal, data: bytearray, value: int) -> None:
    """
    Write the raw `value` of `signal` into `data` in place.

    Only the bits covered by the signal change. Negative values are written as
    two's complement; bits of `value` beyond the signal size are ignored.
    """
    for payload_bit, value_bit in _bit_positions(signal):
        mask = 1 << (payload_bit % 8)
        if (value >> value_bit) & 1:
            data[payload_bit // 8] |= mask
        else:
            data[payload_bit // 8] &= ~mask & 0xFF


def to_signed(raw: int) -> int:
    """Reinterpret a 64-bit raw value as two's complement."""
    if raw & (1 << 63):
        return raw - (1 << 64)
    return raw


def to_physical(signal: Signal, raw: int) -> float:
    return raw * signal.factor + signal.offset


@dataclass(frozen=True)
class SignalValue:
    """Decoded signal: raw value plus what it takes to make it physical"""
    name: str
    raw: int
    factor: float
    offset: float
    unit: str

    @property
    def value(self) -> float:
        return self.raw * self.factor + self.offset

    def __str__(self) -> str:
        text = format_number(self.value)
        if self.unit:
            return f"{text} {self.unit}"
        return text


def decode_value(signal: Signal, data: Sequence[int]) -> SignalValue:
    """
    Decode `signal` from a payload into a physical value.

    Signed signals are reinterpreted as two's complement before
    `raw * factor + offset` is applied.
    """
    raw = decode_signal(signal, data)
    if signal.value_type is ValueType.SIGNED:
        raw = to_signed(raw)
    return SignalValue(signal.name, raw, signal.factor, signal.offset, signal.unit)

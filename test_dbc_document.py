#!/usr/bin/env python3
"""
Tests for DbcDocument: assembly of the sample file, lookups and validation.
"""

from dataclasses import replace

import pytest

from dbcforge.src.dbc_document import DbcDocument
from dbcforge.src.dbc_errors import MultipleMultiplexorsError
from dbcforge.src.dbc_ir import (
    ByteOrder, ExtendedMultiplex, ExtendedMultiplexMapping, Message, MessageId,
    MultiplexIndicator, Signal, SignalExtendedValueType, Transmitter, ValDescription,
    ValueType, Version,
)


def make_signal(name, start_bit=0, size=8, indicator=None):
    return Signal(
        name=name,
        multiplexer_indicator=indicator or MultiplexIndicator.plain(),
        start_bit=start_bit,
        size=size,
        byte_order=ByteOrder.LITTLE_ENDIAN,
        value_type=ValueType.UNSIGNED,
        factor=1.0,
        offset=0.0,
        minimum=0.0,
        maximum=0.0,
        unit="",
    )


def test_sample_document_sections(sample_document):
    assert sample_document.version == Version("0.1")
    assert len(sample_document.new_symbols) == 28
    assert sample_document.bit_timing == ()
    assert [node.name for node in sample_document.nodes] == ["PC"]
    assert [m.message_id.value for m in sample_document.messages] == [2000, 1840, 3040]
    assert [len(m.signals) for m in sample_document.messages] == [4, 4, 7]
    assert len(sample_document.environment_variables) == 2
    assert len(sample_document.comments) == 3
    assert len(sample_document.attribute_defaults) == 1
    assert len(sample_document.attribute_values) == 2


def test_sample_transmitters(sample_document):
    transmitters = [m.transmitter for m in sample_document.messages]
    assert transmitters == [Transmitter(None), Transmitter("PC"), Transmitter(None)]


def test_sample_extended_attribute_ids(sample_document):
    ids = [value.target.message_id for value in sample_document.attribute_values]
    assert ids == [MessageId.extended(0x1FFFFFFF), MessageId.extended(2204433193 & 0x1FFFFFFF)]


def test_lookup_signal_comment(sample_document):
    comment = sample_document.signal_comment(MessageId.standard(1840), "Signal_4")
    assert comment == "asaklfjlsdfjlsdfgls\nHH?=(%)/&KKDKFSDKFKDFKSDFKSDFNKCnvsdcvsvxkcv"


def test_lookup_signal_comment_none_when_missing(sample_document):
    assert sample_document.signal_comment(MessageId.standard(1840), "Signal_2") is None


def test_lookup_message_comment(sample_document):
    assert sample_document.message_comment(MessageId.standard(1840)) == "Some Message comment"


def test_lookup_message_comment_none_when_missing(sample_document):
    assert sample_document.message_comment(MessageId.standard(2000)) is None


def test_lookup_value_descriptions_for_signal(sample_document):
    descriptions = sample_document.value_descriptions_for_signal(MessageId.standard(2000), "Signal_3")
    assert descriptions == (ValDescription(255, "NOP"),)


def test_lookup_value_descriptions_for_signal_none_when_missing(sample_document):
    assert sample_document.value_descriptions_for_signal(MessageId.standard(2000), "Signal_2") is None


def test_lookup_extended_value_type_for_signal(sample_document):
    value_type = sample_document.extended_value_type_for_signal(MessageId.standard(2000), "Signal_8")
    assert value_type is SignalExtendedValueType.IEEE_FLOAT_32BIT


def test_lookup_extended_value_type_for_signal_none_when_missing(sample_document):
    assert sample_document.extended_value_type_for_signal(MessageId.standard(2000), "Signal_1") is None


def test_lookup_signal_by_name(sample_document):
    signal = sample_document.signal_by_name(MessageId.standard(2000), "Signal_8")
    assert signal is not None
    assert signal.start_bit == 24


@pytest.mark.parametrize("message_id, name", [
    (MessageId.standard(2000), "Signal_25"),
    (MessageId.standard(9999), "Signal_8"),
    (MessageId.extended(2000), "Signal_8"),
])
def test_lookup_signal_by_name_none_when_missing(sample_document, message_id, name):
    assert sample_document.signal_by_name(message_id, name) is None


def test_lookup_message_multiplexor_switch(sample_document):
    switch = sample_document.message_multiplexor_switch(MessageId.standard(3040))
    assert switch is not None
    assert switch.name == "Switch"


def test_lookup_message_multiplexor_switch_none_when_missing(sample_document):
    assert sample_document.message_multiplexor_switch(MessageId.standard(1840)) is None
    assert sample_document.message_multiplexor_switch(MessageId.standard(4242)) is None


def test_lookup_message_multiplexor_switch_extended_multiplexing(sample_document):
    document = replace(sample_document, extended_multiplex=(
        ExtendedMultiplex(MessageId.standard(3040), "Signal_6", "Switch",
                          (ExtendedMultiplexMapping(2, 2),)),
    ))
    with pytest.raises(MultipleMultiplexorsError):
        document.message_multiplexor_switch(MessageId.standard(3040))
    # other messages are unaffected
    assert document.message_multiplexor_switch(MessageId.standard(1840)) is None


def test_lookups_return_first_match():
    first = Message(MessageId.standard(1), "First", 8, Transmitter(None), (make_signal("A"),))
    second = Message(MessageId.standard(1), "Second", 8, Transmitter(None), (make_signal("A", 8),))
    document = DbcDocument(messages=(first, second))
    assert document.message_by_id(MessageId.standard(1)) is first
    assert document.signal_by_name(MessageId.standard(1), "A").start_bit == 0


def test_empty_document():
    document = DbcDocument()
    assert document.version == Version("")
    assert document.bit_timing is None
    assert document.message_by_id(MessageId.standard(1)) is None
    document.validate()


def test_sample_document_validates(sample_document):
    sample_document.validate()


@pytest.mark.parametrize("message", [
    Message(MessageId.standard(0x10000), "TooBig", 8, Transmitter(None)),
    Message(MessageId.extended(0x20000000), "TooBig", 8, Transmitter(None)),
    Message(MessageId.standard(1), "Negative", -1, Transmitter(None)),
    Message(MessageId.standard(1), "Wide", 8, Transmitter(None), (make_signal("S", size=65),)),
])
def test_validate_rejects_broken_invariants(message):
    with pytest.raises(ValueError):
        DbcDocument(messages=(message,)).validate()


def test_documents_compare_structurally(parser, sample_dbc):
    assert parser.parse_and_transform(sample_dbc) == parser.parse_and_transform(sample_dbc)

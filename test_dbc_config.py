#!/usr/bin/env python3
"""
Tests for DbcSettings and how the parser honours them.
"""

import logging
import os

import pytest

from dbcforge.src.dbc_config import DEFAULT_ENCODING, DbcSettings
from dbcforge.src.dbc_errors import DbcEncodingError, OrphanSignalError
from dbcforge.src.dbc_parser import DbcParser, parse_dbc

ORPHAN_SIGNAL_DBC = 'BU_: A\n SG_ Lost : 0|8@1+ (1,0) [0|0] "" A\nBO_ 1 M: 8 A\n'


def test_defaults_from_empty_environment():
    settings = DbcSettings.from_env(environ={})
    assert settings == DbcSettings(encoding=DEFAULT_ENCODING, strict_signals=False, parser_cache=False)


def test_values_from_environment_mapping():
    settings = DbcSettings.from_env(environ={
        "DBCFORGE_ENCODING": "utf-8",
        "DBCFORGE_STRICT_SIGNALS": "Yes",
        "DBCFORGE_PARSER_CACHE": "0",
    })
    assert settings == DbcSettings(encoding="utf-8", strict_signals=True, parser_cache=False)


def test_values_from_process_environment(monkeypatch):
    monkeypatch.setenv("DBCFORGE_ENCODING", "latin-1")
    monkeypatch.setenv("DBCFORGE_STRICT_SIGNALS", "true")
    settings = DbcSettings.from_env(dotenv=False)
    assert settings.encoding == "latin-1"
    assert settings.strict_signals is True


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    monkeypatch.delenv("DBCFORGE_ENCODING", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("DBCFORGE_ENCODING=utf-16\n")
    try:
        assert DbcSettings.from_env().encoding == "utf-16"
    finally:
        os.environ.pop("DBCFORGE_ENCODING", None)


@pytest.mark.parametrize("environ", [
    {"DBCFORGE_ENCODING": "no-such-codec"},
    {"DBCFORGE_STRICT_SIGNALS": "maybe"},
])
def test_invalid_settings_raise(environ):
    with pytest.raises(ValueError):
        DbcSettings.from_env(environ=environ)


def test_orphan_signal_dropped_with_warning(settings, caplog):
    with caplog.at_level(logging.WARNING, logger="dbcforge.src.dbc_assembler"):
        document = parse_dbc(ORPHAN_SIGNAL_DBC, settings=settings)
    assert document.messages[0].signals == ()
    assert "Lost" in caplog.text


def test_orphan_signal_strict_mode():
    with pytest.raises(OrphanSignalError) as exc_info:
        parse_dbc(ORPHAN_SIGNAL_DBC, settings=DbcSettings(strict_signals=True))
    assert exc_info.value.signal_name == "Lost"
    assert exc_info.value.line == 2


def test_strict_mode_from_environment(monkeypatch):
    monkeypatch.setenv("DBCFORGE_STRICT_SIGNALS", "1")
    with pytest.raises(OrphanSignalError):
        parse_dbc(ORPHAN_SIGNAL_DBC)


def test_duplicate_version_is_logged(settings, caplog):
    with caplog.at_level(logging.WARNING, logger="dbcforge.src.dbc_assembler"):
        document = parse_dbc('VERSION "a"\nVERSION "b"\n', settings=settings)
    assert document.version.text == "a"
    assert "duplicate VERSION" in caplog.text


def test_configured_encoding_decodes_bytes():
    parser = DbcParser(settings=DbcSettings(encoding="utf-8"))
    document = parser.parse_and_transform('CM_ "café";'.encode("utf-8"))
    assert document.comments[0].comment == "café"


def test_undecodable_bytes_raise():
    parser = DbcParser(settings=DbcSettings(encoding="utf-8"))
    with pytest.raises(DbcEncodingError):
        parser.parse_and_transform(b'CM_ "\xff\xfe";')

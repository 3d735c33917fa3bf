"""
Runtime settings for the DBC parser.

Settings come from environment variables, optionally provided through a `.env`
file picked up by python-dotenv:

    DBCFORGE_ENCODING        codec used when parsing bytes (default: cp1252)
    DBCFORGE_STRICT_SIGNALS  raise on signals that precede every message (default: false)
    DBCFORGE_PARSER_CACHE    cache the compiled LALR tables on disk (default: false)
"""

import codecs
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "DBCFORGE_"
DEFAULT_ENCODING = "cp1252"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class DbcSettings:
    """Parser settings"""
    encoding: str = DEFAULT_ENCODING
    strict_signals: bool = False
    parser_cache: bool = False

    def validate(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 dotenv: bool = True) -> "DbcSettings":
        """
        Load settings from the process environment.

        Args:
            environ: Mapping to read instead of os.environ (mainly for tests)
            dotenv: Load a `.env` file found from the working directory first

        Returns:
            Validated DbcSettings
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        settings = cls(
            encoding=environ.get(ENV_PREFIX + "ENCODING") or DEFAULT_ENCODING,
            strict_signals=_env_flag(environ, "STRICT_SIGNALS", False),
            parser_cache=_env_flag(environ, "PARSER_CACHE", False),
        )
        settings.validate()
        return settings

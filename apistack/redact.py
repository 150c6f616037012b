from __future__ import annotations

import re
from .resources.descriptor import REDACTED

TOKENISH = re.compile(r"(?i)(secret|token|password|passwd|apikey|api_key)")
HEX_LONG = re.compile(r"\b[0-9a-f]{32,}\b", re.I)
URL_PASSWORD = re.compile(r"(?P<scheme>[a-z][a-z0-9+.-]*://[^:/@\s]+:)(?P<password>[^@\s]+)(?P<at>@)", re.I)


def redact_string(s: str) -> str:
    if TOKENISH.search(s) or HEX_LONG.search(s):
        return REDACTED
    return s


def redact_url(url: str) -> str:
    """Mask the password segment of a connection string, keep the rest."""
    return URL_PASSWORD.sub(lambda m: f"{m.group('scheme')}{REDACTED}{m.group('at')}", url)


def redact_env(key: str, value: str) -> str:
    """Printable form of one environment entry for log output."""
    if TOKENISH.search(key):
        return REDACTED
    return redact_string(redact_url(value))

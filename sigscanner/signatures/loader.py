"""Rule file loading and validation.

    plugins:
      - endpoints: ["/wp-login.php"]
        follow_redirects: false
        checks:
          - name: wordpress-login
            all_match: ["WordPress"]
            match: ["wp-submit"]
            status_code: 200
            headers: ["X-Powered-By:PHP"]
            severity: info
            description: WordPress login page exposed
            remediation: Restrict access to the login page
"""

import logging
import os
from typing import Any, BinaryIO, Dict, List, Union

import yaml

from sigscanner.core.errors import (
    DeserializationError, InvalidHeaderFormatError, MissingFieldError,
    PathNotFoundError,
)
from sigscanner.signatures.model import Check, Plugin, Signatures
from sigscanner.signatures.severity import string_to_severity

logger = logging.getLogger(__name__)

# yaml key → Check attribute
_CHECK_LISTS = {
    "match": "must_match_one",
    "all_match": "must_match_all",
    "no_match": "must_not_match",
    "headers": "headers",
    "no_headers": "no_headers",
}
_CHECK_STRINGS = ("name", "remediation", "severity", "description")


def reader_from_file(path: str) -> BinaryIO:
    """Open the signatures file for reading. The caller closes it."""
    if not os.path.exists(path):
        raise PathNotFoundError(path)
    return open(path, "rb")


# ── structural decoding ────────────────────────────────────────

def _mapping(value: Any, where: str) -> Dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DeserializationError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _list(value: Any, where: str) -> List:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DeserializationError(f"{where}: expected a sequence, got {type(value).__name__}")
    return value


def _scalar_text(value: Any, where: str) -> str:
    # numbers and booleans in text fields are read as their YAML spelling
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise DeserializationError(f"{where}: expected a string, got {type(value).__name__}")


def _strings(value: Any, where: str) -> List[str]:
    return [_scalar_text(item, f"{where}[{i}]") for i, item in enumerate(_list(value, where))]


def _string(value: Any, where: str) -> str:
    return _scalar_text(value, where)


def _status_code(value: Any, where: str):
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializationError(f"{where}: expected an integer, got {type(value).__name__}")
    return value


def _bool(value: Any, where: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DeserializationError(f"{where}: expected a boolean, got {type(value).__name__}")
    return value


def _decode_check(raw: Any, where: str) -> Check:
    raw = _mapping(raw, where)
    kwargs = {attr: _strings(raw.get(key), f"{where}.{key}") for key, attr in _CHECK_LISTS.items()}
    for key in _CHECK_STRINGS:
        kwargs[key] = _string(raw.get(key), f"{where}.{key}")
    kwargs["status_code"] = _status_code(raw.get("status_code"), f"{where}.status_code")
    return Check(**kwargs)


def _decode_plugin(raw: Any, where: str) -> Plugin:
    raw = _mapping(raw, where)
    checks = [_decode_check(c, f"{where}.checks[{i}]")
              for i, c in enumerate(_list(raw.get("checks"), f"{where}.checks"))]
    return Plugin(
        endpoints=_strings(raw.get("endpoints"), f"{where}.endpoints"),
        checks=checks,
        follow_redirects=_bool(raw.get("follow_redirects"), f"{where}.follow_redirects"),
    )


# ── validation ─────────────────────────────────────────────────

def validate_check(check: Check) -> None:
    """Raise the first load-time rule *check* breaks."""
    for field in ("description", "remediation", "severity"):
        if getattr(check, field) == "":
            raise MissingFieldError(check.name, field)

    string_to_severity(check.severity)

    for header in check.headers + check.no_headers:
        if header.count(":") != 1:
            raise InvalidHeaderFormatError(header)


def parse_signatures(raw: Union[bytes, str, BinaryIO]) -> Signatures:
    """
    Decode and validate a rule document.

    *raw* may be bytes, text, or a readable stream. Nothing is returned unless
    every check of every plugin is valid.
    """
    if hasattr(raw, "read"):
        raw = raw.read()

    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DeserializationError(f"invalid YAML: {e}") from e

    document = _mapping(document, "document")
    plugins = [_decode_plugin(p, f"plugins[{i}]")
               for i, p in enumerate(_list(document.get("plugins"), "plugins"))]

    for plugin in plugins:
        for check in plugin.checks:
            validate_check(check)

    return Signatures(plugins=plugins)


def load_signatures(path: str) -> Signatures:
    """Read and parse the signatures file at *path*."""
    with reader_from_file(path) as fh:
        sign = parse_signatures(fh)
    logger.debug("Loaded %d plugins / %d checks from %s",
                 len(sign), sum(len(p.checks) for p in sign), path)
    return sign

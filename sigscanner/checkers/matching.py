"""Signature match engine: evaluates one Check against one captured response.

Stages run in a fixed order and stop at the first one that fails:

  1) status code gate
  2) AND   body strings (all_match)
  3) OR    body strings (match)
  4) NAND  body strings (no_match)
  5) headers that must be present with a matching value
  6) headers that must not carry a matching value

All comparisons are exact substrings: no case folding, no trimming.
"""

from typing import Dict, List, Sequence, Tuple

from sigscanner.core.errors import InvalidHeaderFormatError, NilParameterError


def split_header(header: str) -> Tuple[str, str]:
    """Split a "KEY:VALUE" rule entry; exactly one ':' is allowed."""
    parts = header.split(":")
    if len(parts) != 2:
        raise InvalidHeaderFormatError(header)
    return parts[0], parts[1]


def _contains_all(body: bytes, needles: Sequence[str]) -> bool:
    return all(n.encode() in body for n in needles)


def _contains_one(body: bytes, needles: Sequence[str]) -> bool:
    # An empty list never matches: rules without OR strings can't fire.
    return any(n.encode() in body for n in needles)


def _value_found(values: List[str], wanted: str) -> bool:
    return any(wanted in v for v in values)


def _headers_present(resp_headers: Dict[str, List[str]], headers: Sequence[str]) -> bool:
    for header in headers:
        key, value = split_header(header)
        values = resp_headers.get(key)
        if values is None:
            return False
        if not _value_found(values, value):
            return False
    return True


def _headers_absent(resp_headers: Dict[str, List[str]], headers: Sequence[str]) -> bool:
    for header in headers:
        key, value = split_header(header)
        values = resp_headers.get(key)
        if values is not None and _value_found(values, value):
            return False
    return True


def match(check, resp) -> bool:
    """
    Return True when *resp* satisfies every stage of *check*, False otherwise.

    Raises NilParameterError when check, check.status_code or resp is None,
    and InvalidHeaderFormatError on a malformed header rule.
    """
    if check is None:
        raise NilParameterError("check")
    if check.status_code is None:
        raise NilParameterError("check.StatusCode")
    if resp is None:
        raise NilParameterError("resp")

    if resp.status_code != check.status_code:
        return False

    body = resp.body or b""
    if not _contains_all(body, check.must_match_all):
        return False
    if not _contains_one(body, check.must_match_one):
        return False
    if any(n.encode() in body for n in check.must_not_match):
        return False

    resp_headers = resp.header or {}
    if not _headers_present(resp_headers, check.headers):
        return False
    if not _headers_absent(resp_headers, check.no_headers):
        return False

    return True

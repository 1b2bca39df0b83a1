"""Shared data models for the signature scanner."""

from dataclasses import dataclass, field
from typing import Dict, List

import httpx


def canonical_header_key(key: str) -> str:
    """x-powered-by -> X-Powered-By"""
    if not key or any(c in key for c in " \t:"):
        return key
    return "-".join(p[:1].upper() + p[1:].lower() for p in key.split("-"))


@dataclass
class HTTPResponse:
    """Captured response a check is evaluated against."""
    status_code: int
    body: bytes = b""
    header: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "HTTPResponse":
        header: Dict[str, List[str]] = {}
        # raw keeps repeated headers in wire order
        for raw_key, raw_value in response.headers.raw:
            key = canonical_header_key(raw_key.decode("latin-1"))
            header.setdefault(key, []).append(raw_value.decode("latin-1"))
        return cls(status_code=response.status_code,
                   body=response.content,
                   header=header)


@dataclass
class Finding:
    """A single positive signature match."""
    url: str
    check_name: str
    severity: str          # "critical", "high", "medium", "low", "info"
    description: str
    remediation: str = ""
    status_code: int = 0

    def __str__(self):
        return (f"[{self.severity.upper()}] {self.check_name} "
                f"@ {self.url} - {self.description} "
                f"(HTTP {self.status_code})")

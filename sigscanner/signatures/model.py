"""Signature model: the typed, read-only view of a rule file.

Signatures
  └── Plugin      endpoints to request + checks to run on each response
        └── Check one matching rule

Instances are frozen and hold tuples only, so a loaded set can be shared
between scanner threads without locking.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from sigscanner.checkers.matching import match as _match


def _freeze(obj, *names):
    for name in names:
        value = getattr(obj, name) or ()
        # a lone string is one entry, not a sequence of characters
        if isinstance(value, str):
            value = (value,)
        object.__setattr__(obj, name, tuple(value))


@dataclass(frozen=True)
class Check:
    must_match_one: Tuple[str, ...] = ()
    must_match_all: Tuple[str, ...] = ()
    must_not_match: Tuple[str, ...] = ()
    status_code: Optional[int] = None
    name: str = ""
    remediation: str = ""
    severity: str = ""
    description: str = ""
    headers: Tuple[str, ...] = ()
    no_headers: Tuple[str, ...] = ()

    def __post_init__(self):
        _freeze(self, "must_match_one", "must_match_all", "must_not_match",
                "headers", "no_headers")

    def match(self, resp) -> bool:
        """Evaluate this check against an HTTPResponse (see checkers.matching)."""
        return _match(self, resp)


@dataclass(frozen=True)
class Plugin:
    endpoints: Tuple[str, ...] = ()
    checks: Tuple[Check, ...] = ()
    follow_redirects: bool = False

    def __post_init__(self):
        _freeze(self, "endpoints", "checks")


@dataclass(frozen=True)
class Signatures:
    plugins: Tuple[Plugin, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _freeze(self, "plugins")

    def __iter__(self) -> Iterator[Plugin]:
        return iter(self.plugins)

    def __len__(self) -> int:
        return len(self.plugins)

    def checks_with_severity(self, severity: str) -> Iterator[Tuple[Tuple[str, ...], str, str, str]]:
        """
        Yield (endpoints, name, severity, description) for every check whose
        severity label equals *severity*, in document order.
        """
        for plugin in self.plugins:
            for check in plugin.checks:
                if check.severity == severity:
                    yield plugin.endpoints, check.name, check.severity, check.description

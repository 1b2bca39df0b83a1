from enum import IntEnum

from sigscanner.core.errors import InvalidSeverityError


class Severity(IntEnum):
    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def __str__(self):
        return self.name.lower()


_LABELS = {
    "info": Severity.INFO,
    "informational": Severity.INFO,
    "low": Severity.LOW,
    "medium": Severity.MEDIUM,
    "high": Severity.HIGH,
    "critical": Severity.CRITICAL,
}


def string_to_severity(label: str) -> Severity:
    """Resolve a rule file severity label ("High", "info", ...) to its level."""
    if not isinstance(label, str):
        raise InvalidSeverityError(label)
    try:
        return _LABELS[label.strip().lower()]
    except KeyError:
        raise InvalidSeverityError(label) from None

"""Exceptions raised while loading signatures and matching responses."""


class SignatureError(Exception):
    """Base class for every signature loading / matching failure."""


class PathNotFoundError(SignatureError):

    def __init__(self, path: str):
        self.path = path
        super().__init__("path of signatures file is not valid")


class DeserializationError(SignatureError):
    """The rule file is not valid YAML or has the wrong shape."""


class MissingFieldError(SignatureError):

    def __init__(self, check: str, field: str):
        self.check = check
        self.field = field
        super().__init__(f"missing or empty {field} in {check} plugin checks.")


class InvalidSeverityError(SignatureError):

    def __init__(self, severity: str):
        self.severity = severity
        super().__init__(f"invalid severity: {severity!r}")


class InvalidHeaderFormatError(SignatureError):

    def __init__(self, header: str):
        self.header = header
        super().__init__(f'invalid header format: {header} should be "KEY:VALUE"')


class NilParameterError(SignatureError):
    """A required argument of match() was None."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"parameter {parameter} can't be None")

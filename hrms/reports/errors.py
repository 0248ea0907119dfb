from __future__ import annotations

from typing import Optional


class ReportError(Exception):
    """Base class for every failure raised while dispatching a report."""


class UnknownReport(ReportError, KeyError):
    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Unknown report_id '{report_id}'")

    def __str__(self) -> str:
        return self.args[0]


class UnknownHandler(ReportError):
    """
    Registry and handler table have drifted apart.
    Internal fault, not caused by the caller.
    """

    def __init__(self, handler_key: str, report_id: Optional[str] = None):
        self.handler_key = handler_key
        self.report_id = report_id
        where = f" (report '{report_id}')" if report_id else ""
        super().__init__(f"No handler registered for key '{handler_key}'{where}")


class ValidationError(ReportError, ValueError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class MissingField(ValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Missing required field '{field}'.")


class InvalidRange(ValidationError):
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(field, message or f"'{field}' cannot be before the start of the range.")


class InvalidValue(ValidationError):
    def __init__(self, field: str, value):
        self.value = value
        super().__init__(field, f"Invalid value for '{field}': {value!r}")


class UnknownReference(ValidationError):
    def __init__(self, field: str, value):
        self.value = value
        super().__init__(field, f"'{field}' does not reference an existing record: {value!r}")


class MissingReference(ReportError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing '{key}' to fetch the stored attachment.")


class RetrievalError(ReportError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class NotFound(ReportError):
    pass

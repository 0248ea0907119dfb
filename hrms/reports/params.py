from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from hrms.reports.errors import InvalidRange, InvalidValue, MissingField, UnknownReference
from hrms.reports.registry import ParamType


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_date(field: str, value: Any) -> date:
    """ISO date, or full ISO timestamp reduced to its date. Anything else is InvalidValue."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidValue(field, value) from None


def _validate_date_range(raw: Mapping[str, Any], source=None) -> Dict[str, Any]:
    for field in ("startDate", "endDate"):
        if _blank(raw.get(field)):
            raise MissingField(field)

    start = parse_date("startDate", raw["startDate"])
    end = parse_date("endDate", raw["endDate"])
    if end < start:
        raise InvalidRange("endDate", "End date cannot be before start date.")
    return {"start_date": start, "end_date": end}


# record ids travel in URLs; letters, digits, "-" and "_" only
ID_TOKEN = re.compile(r"[A-Za-z0-9_-]+")


def _selector(field: str, key: str, exists: Optional[Callable[[Any, Any], bool]] = None, token: bool = False):
    def validate(raw: Mapping[str, Any], source=None) -> Dict[str, Any]:
        value = raw.get(field)
        if _blank(value):
            raise MissingField(field)
        if isinstance(value, str):
            value = value.strip()
        if token and (isinstance(value, bool) or not ID_TOKEN.fullmatch(str(value))):
            raise InvalidValue(field, value)
        if exists is not None and source is not None and not exists(source, value):
            raise UnknownReference(field, value)
        return {key: value}
    return validate


# ParamType -> (raw field names, validator)
PARAM_VALIDATORS: Dict[ParamType, Tuple[Tuple[str, ...], Callable[..., Dict[str, Any]]]] = {
    ParamType.DATE_RANGE: (("startDate", "endDate"), _validate_date_range),
    ParamType.PROGRAM_SELECTOR: (
        ("programId",),
        _selector("programId", "program_id", lambda src, v: src.training_program(v) is not None),
    ),
    ParamType.PAYROLL_RUN_SELECTOR: (("runId",), _selector("runId", "run_id")),
    ParamType.EMPLOYEE_SELECTOR: (("employeeId",), _selector("employeeId", "employee_id")),
    ParamType.LEAVE_SELECTOR: (("leaveId",), _selector("leaveId", "leave_id", token=True)),
}


def param_fields(param_type: ParamType) -> Tuple[str, ...]:
    return PARAM_VALIDATORS[param_type][0]


def validate_params(param_type: ParamType, raw: Optional[Mapping[str, Any]], source=None) -> Dict[str, Any]:
    """
    Validate a raw parameter bag against one ParamType and return the
    normalized (snake_case) parameters.

    Raises MissingField / InvalidValue / InvalidRange / UnknownReference,
    each naming the offending field. Keys not belonging to the schema are ignored.
    When `source` is given, selectors that reference stored records
    (training programs) are checked for existence.
    """
    _, validator = PARAM_VALIDATORS[param_type]
    return validator(raw or {}, source)

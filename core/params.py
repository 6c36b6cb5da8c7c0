# =============================================================================
# core/params.py  -  Parameter Validator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns whatever the remote caller sent into a FetchParams, or raises
#   ValidationError.  It runs in TWO separate stages:
#
#   1. normalize_arguments()  LENIENT.  Callers over MCP are schema-less and
#      often send "5" instead of 5, or "" for "not set".  This stage only
#      coerces obvious stringly-typed values and drops empty ones.  It never
#      rejects anything.
#
#   2. validate_params()      STRICT.  Applies the fixed schema (ranges,
#      types) and reports EVERY violation in one message.
#
#   "5" becomes 5 and passes; 1.5, 0 and "2023-13-45" reach the strict stage
#   unchanged and fail there.
#
# NO I/O HAPPENS HERE.
# =============================================================================

from datetime import date, datetime
import logging
import math
from typing import Any, Mapping, Optional

import pydantic

from core.errors import ValidationError
from core.models import FetchParams

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("page", "per_page")
_DATE_FIELDS = ("created_from", "created_to")

# camelCase spellings some clients send.  Snake_case wins if both are given.
_ALIASES = {
    "createdFrom": "created_from",
    "createdTo": "created_to",
    "additionalFields": "additional_fields",
    "perPage": "per_page",
}


# =============================================================================
# STAGE 1: lenient normalization
# =============================================================================
class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


_MISSING = _Missing()


def _coerce_number(value: Any) -> Any:
    """Return a number for numeric strings, _MISSING for blank/garbage ones.

    Non-string values are returned untouched so the strict stage can judge
    them (1.5 stays 1.5 and is rejected there as a non-integer).
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return _MISSING
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return _MISSING
    if not math.isfinite(number):
        return _MISSING
    return number


def _coerce_date(value: Any) -> Any:
    """Reduce datetimes to their own calendar date and parse ISO date strings.

    A datetime keeps its own year/month/day, whatever its tzinfo.  No UTC
    conversion happens, so 2023-01-01T23:30-08:00 stays 2023-01-01.
    """
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return _MISSING
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        # Leave it for the strict stage to reject.
        return text


def normalize_arguments(arguments: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Lenient stage: coerce loosely-typed remote input into plain values.

    Keys with value None, "" or an unparsable number are dropped entirely,
    which the strict stage then treats as "no filter applied".
    """
    normalized: dict[str, Any] = {}
    if not arguments:
        return normalized

    for key, value in arguments.items():
        name = _ALIASES.get(key, key)
        if name != key and name in arguments:
            continue
        if value is None:
            continue

        if name in _NUMERIC_FIELDS:
            value = _coerce_number(value)
        elif name in _DATE_FIELDS:
            value = _coerce_date(value)

        if value is _MISSING:
            logger.debug("Dropping blank or non-numeric %s", name)
            continue
        normalized[name] = value

    return normalized


# =============================================================================
# STAGE 2: strict validation
# =============================================================================
def _describe(error: dict) -> str:
    """Turn one pydantic error into a short human-readable reason."""
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "greater_than_equal":
        return f"must be >= {ctx.get('ge')}"
    if kind == "less_than_equal":
        return f"must be <= {ctx.get('le')}"
    if kind.startswith("int_"):
        return "must be an integer"
    if kind.startswith("date_"):
        return "must be a valid date (YYYY-MM-DD)"
    if kind == "list_type":
        return "must be a list"
    if kind == "string_type":
        return "must be a string"
    return error.get("msg", "is invalid")


def validate_params(values: Mapping[str, Any]) -> FetchParams:
    """Strict stage: apply the fixed schema or raise ValidationError.

    Every violation is reported, in field order, as "<field>: <reason>".
    """
    try:
        return FetchParams.model_validate(dict(values))
    except pydantic.ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()))
            problems.append(f"{field}: {_describe(error)}")
        raise ValidationError(problems) from exc


def parse_params(arguments: Optional[Mapping[str, Any]]) -> FetchParams:
    """Run both stages: normalize_arguments() then validate_params()."""
    return validate_params(normalize_arguments(arguments))

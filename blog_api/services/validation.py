"""
Declarative request validation.

Each resource operation describes its input as a plain table::

    POST_CREATE_FIELDS = {
        "title": FieldRules("title", required=True, rules=(
            is_string("title must be a string"),
            min_length(5, "title must be at least 5 characters"),
        )),
    }

and ``validate_payload`` checks a raw request dict against it. Rules run in
the order they are listed and stop at the first failure for that field, so
later rules can rely on earlier ones (``min_length`` after ``is_string``).
A rule may also return a converted value, which is what query-string rules
such as ``to_int`` use to turn ``"2"`` into ``2`` before ``min_value`` runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping

from pydantic import EmailStr, HttpUrl, TypeAdapter, ValidationError

from blog_api.core.errors import ValidationFailed

_EMAIL_ADAPTER = TypeAdapter(EmailStr)
_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)
_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"0", "false", "no", "n"}


class RuleViolation(ValueError):
    pass


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[Any], Any]
    message: str

    def apply(self, value: Any) -> Any:
        try:
            return self.check(value)
        except (RuleViolation, TypeError, ValueError, OverflowError, InvalidOperation):
            raise RuleViolation(self.message) from None


@dataclass(frozen=True)
class FieldRules:
    attr: str
    required: bool = False
    required_message: str = ""
    rules: tuple[Rule, ...] = field(default_factory=tuple)


def _ensure(condition: bool, value: Any) -> Any:
    if not condition:
        raise RuleViolation()
    return value


def is_string(message: str) -> Rule:
    return Rule("is_string", lambda v: _ensure(isinstance(v, str), v), message)


def is_int(message: str) -> Rule:
    return Rule("is_int", lambda v: _ensure(isinstance(v, int) and not isinstance(v, bool), v), message)


def is_bool(message: str) -> Rule:
    return Rule("is_bool", lambda v: _ensure(isinstance(v, bool), v), message)


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise RuleViolation()
    if isinstance(value, int):
        return value
    text = str(value).strip()
    number = Decimal(text)
    if number != number.to_integral_value():
        raise RuleViolation()
    return int(number)


def to_int(message: str) -> Rule:
    return Rule("to_int", _coerce_int, message)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value or "").strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise RuleViolation()


def to_bool(message: str) -> Rule:
    return Rule("to_bool", _coerce_bool, message)


def min_length(limit: int, message: str) -> Rule:
    return Rule("min_length", lambda v: _ensure(len(v) >= limit, v), message)


def max_length(limit: int, message: str) -> Rule:
    return Rule("max_length", lambda v: _ensure(len(v) <= limit, v), message)


def min_value(limit: int, message: str) -> Rule:
    return Rule("min_value", lambda v: _ensure(v >= limit, v), message)


def max_value(limit: int, message: str) -> Rule:
    return Rule("max_value", lambda v: _ensure(v <= limit, v), message)


def one_of(choices: Mapping[str, Any] | tuple[Any, ...], message: str) -> Rule:
    """Accept only listed values; a mapping also translates the value."""
    if isinstance(choices, Mapping):
        return Rule("one_of", lambda v: choices[_ensure(v in choices, v)], message)
    return Rule("one_of", lambda v: _ensure(v in choices, v), message)


def _check_email(value: str) -> str:
    try:
        normalized = _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        raise RuleViolation() from None
    # EmailStr also takes "Name <addr>"; only a bare address is allowed here.
    return _ensure(normalized.casefold() == value.casefold(), value)


def is_email(message: str) -> Rule:
    return Rule("is_email", _check_email, message)


def _check_url(value: str) -> str:
    try:
        url = _HTTP_URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise RuleViolation() from None
    host = (url.host or "").rstrip(".")
    return _ensure(bool(host) and all(host.split(".")), value)


def is_url(message: str) -> Rule:
    return Rule("is_url", _check_url, message)


def validate_payload(
    payload: Any,
    fields: Mapping[str, FieldRules],
    *,
    partial: bool = False,
) -> dict[str, Any]:
    """Check ``payload`` against ``fields`` and return values keyed by ``attr``.

    Unknown keys are rejected, ``None`` counts as "not supplied", and with
    ``partial=True`` required fields may be omitted but at least one field
    must be present. Every failing field is reported in one
    ``ValidationFailed``.
    """
    if not isinstance(payload, Mapping):
        raise ValidationFailed([{"field": "body", "message": "request body must be a JSON object"}])

    errors: list[dict[str, str]] = []
    for key in payload:
        if key not in fields:
            errors.append({"field": str(key), "message": f'property {key} should not exist'})

    cleaned: dict[str, Any] = {}
    for name, spec in fields.items():
        value = payload.get(name)
        if spec.required and value == "":
            errors.append({"field": name, "message": spec.required_message or f"{name} is required"})
            continue
        if value is None:
            if spec.required and not partial:
                errors.append({"field": name, "message": spec.required_message or f"{name} is required"})
            continue
        try:
            for rule in spec.rules:
                value = rule.apply(value)
        except RuleViolation as exc:
            errors.append({"field": name, "message": str(exc)})
            continue
        cleaned[spec.attr] = value

    if errors:
        raise ValidationFailed(errors)
    if partial and not cleaned:
        raise ValidationFailed([{"field": "body", "message": "no fields to update"}])
    return cleaned

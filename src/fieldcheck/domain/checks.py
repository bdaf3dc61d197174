"""Built-in rule checks and the rule registry.

Every check has the same signature: it receives the resolved field value
(possibly :data:`~fieldcheck.domain.paths.MISSING`) and the rule's
positional parameters, and returns ``None`` when the value passes or the
default error message when it fails.

Checks never raise on bad input. Misconfiguration (a missing regex
pattern, a missing bound) is reported as a message, like any other
failure.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any, TypeAlias

from email_validator import EmailNotValidError, validate_email

from fieldcheck.domain.paths import MISSING

RuleFunc: TypeAlias = Callable[..., str | None]

_INT_PATTERN = re.compile(r"^[+-]?(0|[1-9]\d*)$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

BOOLEAN_STRINGS = frozenset({"1", "0", "true", "false"})
DATE_FORMAT = "%Y-%m-%d"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> int | float | None:
    """Return *value* as a finite number, or None if it is not numeric.

    Numbers pass through. Strings are accepted when they hold a decimal
    or exponent literal; booleans are never numeric.
    """
    if _is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if _INT_PATTERN.match(text):
        try:
            return int(text)
        except ValueError:
            # Longer than sys.get_int_max_str_digits()
            pass
    if _FLOAT_PATTERN.match(text):
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def _bound(rule: str, params: tuple[Any, ...]) -> tuple[int | float | None, str | None]:
    """Return ``(limit, None)`` or ``(None, error)`` for a bounded rule."""
    if not params or params[0] is None:
        return None, f"Missing parameter for rule: {rule}"
    limit = _to_number(params[0])
    if limit is None:
        return None, f"Invalid parameter for rule: {rule}"
    return limit, None


# ---------------------------------------------------------------------------
# Presence and type checks
# ---------------------------------------------------------------------------


def check_required(value: Any, *_params: Any) -> str | None:
    """Value is present and not the empty string."""
    if value is MISSING or value is None or value == "":
        return "This field is required."
    return None


def check_email(value: Any, *_params: Any) -> str | None:
    """Value is a syntactically valid email address (no DNS lookups)."""
    if not isinstance(value, str):
        return "Invalid email address."
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return "Invalid email address."
    return None


def check_int(value: Any, *_params: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return None
    if isinstance(value, str) and _INT_PATTERN.match(value.strip()):
        return None
    return "Must be an integer."


def check_float(value: Any, *_params: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return None
    if isinstance(value, float) and math.isfinite(value):
        return None
    if isinstance(value, str) and _FLOAT_PATTERN.match(value.strip()):
        return None
    return "Must be a float."


def check_boolean(value: Any, *_params: Any) -> str | None:
    """Value is one of True/False, 1/0, or "1"/"0"/"true"/"false".

    The accepted set is fixed: ``"yes"``, ``"on"``, ``1.0`` and friends
    fail.
    """
    if isinstance(value, bool):
        return None
    if type(value) is int and value in (0, 1):
        return None
    if isinstance(value, str) and value in BOOLEAN_STRINGS:
        return None
    return "Must be a boolean value."


def check_date(value: Any, *_params: Any) -> str | None:
    """Value is a ``YYYY-MM-DD`` string naming a real calendar day."""
    message = "Invalid date format (Y-m-d)."
    if not isinstance(value, str):
        return message
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return message
    # strptime accepts unpadded fields such as "2020-2-3"
    if parsed.isoformat() != value:
        return message
    return None


# ---------------------------------------------------------------------------
# Bounded checks
# ---------------------------------------------------------------------------


def check_min_length(value: Any, *params: Any) -> str | None:
    limit, error = _bound("min_length", params)
    if error:
        return error
    if not isinstance(value, str):
        return "Invalid value for length check."
    if len(value) < limit:
        return f"Must be at least {limit} characters long."
    return None


def check_max_length(value: Any, *params: Any) -> str | None:
    limit, error = _bound("max_length", params)
    if error:
        return error
    if not isinstance(value, str):
        return "Invalid value for length check."
    if len(value) > limit:
        return f"Must be no more than {limit} characters long."
    return None


def check_min(value: Any, *params: Any) -> str | None:
    limit, error = _bound("min", params)
    if error:
        return error
    number = _to_number(value)
    if number is None:
        return "Must be a number."
    if number < limit:
        return f"Must be at least {limit}."
    return None


def check_max(value: Any, *params: Any) -> str | None:
    limit, error = _bound("max", params)
    if error:
        return error
    number = _to_number(value)
    if number is None:
        return "Must be a number."
    if number > limit:
        return f"Must be no more than {limit}."
    return None


def check_regex(value: Any, *params: Any) -> str | None:
    """String form of the value matches the pattern (``re.search``)."""
    pattern = params[0] if params else None
    if not pattern or not isinstance(pattern, str):
        return "Invalid regex pattern."
    try:
        compiled = re.compile(pattern)
    except re.error:
        return "Invalid regex pattern."
    text = "" if value is MISSING or value is None else str(value)
    if compiled.search(text) is None:
        return "Invalid format."
    return None


BUILTIN_RULES: dict[str, RuleFunc] = {
    "required": check_required,
    "email": check_email,
    "int": check_int,
    "float": check_float,
    "boolean": check_boolean,
    "date": check_date,
    "min_length": check_min_length,
    "max_length": check_max_length,
    "min": check_min,
    "max": check_max,
    "regex": check_regex,
}


def unknown_rule_message(name: str) -> str:
    return f"Unknown validation rule: {name}"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class RuleRegistry:
    """Lookup table from rule name to check function.

    Starts with the built-in checks. Extra rules (e.g. from plugins) are
    added with :meth:`register`; built-in names are reserved.
    """

    def __init__(self) -> None:
        self._rules: dict[str, RuleFunc] = dict(BUILTIN_RULES)

    def register(self, name: str, func: RuleFunc) -> None:
        """Register *func* under *name*.

        Raises:
            ValueError: If *name* is empty, built-in, or already bound to
                a different function.
            TypeError: If *func* is not callable.
        """
        normalized_name = name.strip() if isinstance(name, str) else ""
        if not normalized_name:
            msg = "Rule name must not be empty"
            raise ValueError(msg)

        if not callable(func):
            msg = f"Rule {normalized_name!r} must be callable, got {type(func).__name__}"
            raise TypeError(msg)

        if normalized_name in BUILTIN_RULES:
            msg = f"Rule {normalized_name!r} conflicts with a built-in rule"
            raise ValueError(msg)

        existing = self._rules.get(normalized_name)
        if existing is not None and existing is not func:
            msg = f"Rule {normalized_name!r} is already registered"
            raise ValueError(msg)

        self._rules[normalized_name] = func

    def get(self, name: str) -> RuleFunc | None:
        """Return the check for *name*, or None when it is not registered."""
        return self._rules.get(name)

    def names(self) -> list[str]:
        """Registered rule names, built-ins first, in registration order."""
        return list(self._rules)

    def extra_names(self) -> list[str]:
        """Names registered on top of the built-ins."""
        return [name for name in self._rules if name not in BUILTIN_RULES]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def default_registry() -> RuleRegistry:
    """Return a fresh registry holding only the built-in rules."""
    return RuleRegistry()

"""Rule specifications and rule tables.

A rule table maps field paths to ordered rule sequences. Callers write
rules in a few loose shapes (a bare name, ``{name: message}``,
``{name: [param, message]}``); :func:`parse_rule_spec` turns each of them
into a frozen :class:`RuleSpec` once, when the table is built, so the
evaluation pass never inspects raw shapes.

Shape errors are programming errors and raise at construction time.
Unknown rule names are not shape errors: they surface later as a
validation message on the offending field.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel, Field


class RuleSpec(BaseModel):
    """One entry in a field's rule sequence.

    Attributes:
        name: Registered rule name (e.g. ``"min_length"``).
        params: Positional rule parameters (e.g. ``(3,)``).
        message: Custom error message replacing the rule's default.
    """

    model_config = {"frozen": True}

    name: str
    params: tuple[Any, ...] = Field(default_factory=tuple)
    message: str | None = None


RuleTable: TypeAlias = dict[str, tuple[RuleSpec, ...]]

RawRuleSpec: TypeAlias = str | Mapping[str, Any] | RuleSpec
RawFieldRules: TypeAlias = Iterable[RawRuleSpec] | Mapping[str, Any]


def _from_pair(name: str, value: Any) -> RuleSpec:
    """Build a RuleSpec from a ``name: value`` pair."""
    if not isinstance(name, str) or not name:
        msg = f"Rule name must be a non-empty string, got {name!r}"
        raise TypeError(msg)

    if value is None:
        return RuleSpec(name=name)
    if isinstance(value, str):
        return RuleSpec(name=name, message=value)
    if isinstance(value, (list, tuple)):
        if len(value) > 2:
            msg = f"Rule {name!r} takes [param] or [param, message], got {len(value)} items"
            raise ValueError(msg)
        params = tuple(value[:1])
        message = value[1] if len(value) == 2 else None
        if message is not None and not isinstance(message, str):
            msg = f"Custom message for rule {name!r} must be a string, got {message!r}"
            raise TypeError(msg)
        return RuleSpec(name=name, params=params, message=message)
    if isinstance(value, Mapping):
        msg = f"Rule {name!r} has a nested mapping as its value"
        raise TypeError(msg)
    # Bare scalar parameter, e.g. {"min": 18}
    return RuleSpec(name=name, params=(value,))


def parse_rule_spec(raw: RawRuleSpec) -> RuleSpec:
    """Normalize one raw rule specification into a :class:`RuleSpec`.

    Accepted shapes::

        "required"                        -> RuleSpec("required")
        {"email": "Email must be valid."} -> RuleSpec("email", message=...)
        {"min_length": [3]}               -> RuleSpec("min_length", (3,))
        {"min_length": [3, "Too short"]}  -> RuleSpec("min_length", (3,), "Too short")
        {"min": 18}                       -> RuleSpec("min", (18,))

    Raises:
        TypeError: If *raw* is not one of the accepted shapes.
        ValueError: If a mapping does not hold exactly one rule.
    """
    if isinstance(raw, RuleSpec):
        return raw
    if isinstance(raw, str):
        if not raw:
            msg = "Rule name must not be empty"
            raise ValueError(msg)
        return RuleSpec(name=raw)
    if isinstance(raw, Mapping):
        if len(raw) != 1:
            msg = f"A rule mapping must hold exactly one rule, got {len(raw)}: {dict(raw)!r}"
            raise ValueError(msg)
        ((name, value),) = raw.items()
        return _from_pair(name, value)
    msg = f"Unsupported rule specification: {raw!r}"
    raise TypeError(msg)


def parse_field_rules(raw: RawFieldRules) -> tuple[RuleSpec, ...]:
    """Normalize a field's rule sequence, keeping declaration order.

    *raw* is either a sequence of rule specifications or an ordered
    mapping of rule name to value (``{"required": "Name is required."}``).
    """
    if isinstance(raw, Mapping):
        return tuple(_from_pair(name, value) for name, value in raw.items())
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        msg = f"Field rules must be a list or a mapping, got {raw!r}"
        raise TypeError(msg)
    return tuple(parse_rule_spec(item) for item in raw)


def build_rule_table(rules: Mapping[str, RawFieldRules]) -> RuleTable:
    """Build a :data:`RuleTable` from a raw field-path -> rules mapping.

    Field order follows the order of *rules*.
    """
    table: RuleTable = {}
    for path, field_rules in rules.items():
        if not isinstance(path, str) or not path:
            msg = f"Field path must be a non-empty string, got {path!r}"
            raise TypeError(msg)
        try:
            table[path] = parse_field_rules(field_rules)
        except (TypeError, ValueError) as exc:
            msg = f"Invalid rules for field {path!r}: {exc}"
            raise type(exc)(msg) from exc
    return table


def is_rule_table(rules: Mapping[str, Any]) -> bool:
    """Whether *rules* already holds normalized :class:`RuleSpec` tuples."""
    return all(
        isinstance(specs, tuple) and all(isinstance(s, RuleSpec) for s in specs)
        for specs in rules.values()
    )

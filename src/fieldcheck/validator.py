"""The Validator: one evaluation pass over a rule table.

For each declared field: resolve its value, run its rules in declared
order, and record the first failure. Later rules for that field are not
evaluated.

INVARIANT: ``validate`` is a pure function of its inputs. It mutates
neither the record nor the rule table and keeps no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fieldcheck.domain.checks import RuleRegistry, default_registry, unknown_rule_message
from fieldcheck.domain.paths import resolve_path
from fieldcheck.domain.rules import (
    RawFieldRules,
    RuleSpec,
    RuleTable,
    build_rule_table,
    is_rule_table,
)

logger = logging.getLogger(__name__)


class Validator:
    """Evaluates rule tables against records using a :class:`RuleRegistry`.

    Usage::

        validator = Validator()
        errors = validator.validate(
            {"email": "bad-email"},
            {"email": ["required", {"email": "Email must be valid."}]},
        )
        # {"email": "Email must be valid."}
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def validate(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, RawFieldRules] | RuleTable,
    ) -> dict[str, str]:
        """Return a field-path -> message map for every failing field.

        *rules* may be a raw mapping or a table from
        :func:`~fieldcheck.domain.rules.build_rule_table`.
        """
        table = rules if is_rule_table(rules) else build_rule_table(rules)
        errors: dict[str, str] = {}
        for path, specs in table.items():
            value = resolve_path(data, path)
            message = self._first_failure(value, specs)
            if message is not None:
                errors[path] = message
                logger.debug("Field %s failed: %s", path, message)
        return errors

    def _first_failure(self, value: Any, specs: tuple[RuleSpec, ...]) -> str | None:
        for spec in specs:
            result = self._run(spec, value)
            if result is not None:
                return spec.message if spec.message is not None else result
        return None

    def _run(self, spec: RuleSpec, value: Any) -> str | None:
        func = self._registry.get(spec.name)
        if func is None:
            logger.debug("Unknown validation rule: %s", spec.name)
            return unknown_rule_message(spec.name)
        try:
            return func(value, *spec.params)
        except Exception as exc:
            logger.warning("Rule %s raised while checking a value", spec.name, exc_info=True)
            return f"Rule {spec.name} failed: {exc}"


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, RawFieldRules] | RuleTable,
    *,
    registry: RuleRegistry | None = None,
) -> dict[str, str]:
    """Validate *data* against *rules* and return the error map.

    Shorthand for ``Validator(registry).validate(data, rules)``.
    """
    return Validator(registry).validate(data, rules)

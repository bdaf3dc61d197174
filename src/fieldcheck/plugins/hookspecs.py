"""Pluggy hook specifications for fieldcheck.

One setup-time hook lets plugins contribute extra validation rules to a
:class:`~fieldcheck.domain.checks.RuleRegistry`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from fieldcheck.domain.checks import RuleFunc

PROJECT_NAME = "fieldcheck"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FieldcheckHookSpec:
    """Hook specifications for the fieldcheck plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, RuleFunc] | None:
        """Return rule name -> check function mappings.

        A check receives the resolved value and the rule's positional
        parameters, and returns None on success or an error message.
        """

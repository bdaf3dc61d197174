"""ValidateService: load records and rule tables, run the validator.

Rule files are TOML or JSON documents with a top-level ``fields`` table::

    [fields]
    name = ["required", { min_length = [3, "Name is too short."] }]
    "profile.bio" = [{ max_length = [150] }]

Records are JSON objects. Read and parse failures come back as
``INVALID_INPUT``, malformed rule tables as ``INVALID_RULES``, and failing
fields as ``VALIDATION_FAILED`` with the error map in ``detail``.
"""

from __future__ import annotations

import json
import logging
import time
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fieldcheck.domain.checks import BUILTIN_RULES, RuleRegistry, default_registry
from fieldcheck.domain.rules import RuleTable, build_rule_table
from fieldcheck.services.result import ServiceError, ServiceResult
from fieldcheck.validator import Validator

logger = logging.getLogger(__name__)

RULES_KEY = "fields"


class InputError(Exception):
    """A record or rule file could not be read or parsed."""


def load_document(path: Path) -> dict[str, Any]:
    """Read a TOML (``.toml``) or JSON (anything else) document.

    Raises:
        InputError: If the file is missing, unreadable, or malformed, or
            if the top-level value is not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read {path}: {exc.strerror or exc}"
        raise InputError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Cannot read {path}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
        raise InputError(msg) from exc

    if path.suffix.lower() == ".toml":
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise InputError(msg) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise InputError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path}, got {type(data).__name__}"
        raise InputError(msg)
    return data


def load_rule_table(path: Path) -> RuleTable:
    """Load and build the rule table stored in *path*.

    Raises:
        InputError: If the file cannot be read or has no ``fields`` table.
        TypeError, ValueError: If a rule specification is malformed.
    """
    document = load_document(path)
    fields = document.get(RULES_KEY)
    if not isinstance(fields, Mapping):
        msg = f"Rule file {path} must define a [{RULES_KEY}] table"
        raise InputError(msg)
    return build_rule_table(fields)


class ValidateService:
    """Runs validations for the CLI and other callers.

    Usage::

        svc = ValidateService()
        result = svc.validate_files(Path("signup.json"), Path("signup.toml"))
        if not result.ok:
            print(result.data["errors"])
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._validator = Validator(self._registry)

    def validate_files(self, data_path: Path, rules_path: Path) -> ServiceResult:
        """Validate the JSON record at *data_path* against *rules_path*."""
        op = "validate"
        try:
            data = load_document(data_path)
        except InputError as exc:
            return _input_error(op, str(exc), path=data_path)

        try:
            table = load_rule_table(rules_path)
        except InputError as exc:
            return _input_error(op, str(exc), path=rules_path)
        except (TypeError, ValueError) as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_RULES",
                    message=str(exc),
                    detail={"path": str(rules_path)},
                ),
            )

        return self.validate_record(data, table)

    def validate_record(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
    ) -> ServiceResult:
        """Validate an in-memory record against a raw or built rule table."""
        op = "validate"
        try:
            table = build_rule_table(rules)
        except (TypeError, ValueError) as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_RULES", message=str(exc)),
            )

        started = time.perf_counter()
        errors = self._validator.validate(data, table)
        meta = {"duration_ms": round((time.perf_counter() - started) * 1000, 3)}
        payload = {
            "valid": not errors,
            "fields_checked": len(table),
            "errors": errors,
        }

        if not errors:
            return ServiceResult(ok=True, op=op, data=payload, meta=meta)

        logger.debug("Validation failed for %d of %d fields", len(errors), len(table))
        count = len(errors)
        return ServiceResult(
            ok=False,
            op=op,
            data=payload,
            error=ServiceError(
                code="VALIDATION_FAILED",
                message=f"{count} field{'s' if count != 1 else ''} failed validation",
                detail={"errors": errors},
            ),
            meta=meta,
        )

    def list_rules(self) -> ServiceResult:
        """List the rule names known to this service's registry."""
        builtin = [name for name in self._registry if name in BUILTIN_RULES]
        plugin = self._registry.extra_names()
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={
                "builtin": builtin,
                "plugin": plugin,
                "count": len(builtin) + len(plugin),
            },
        )


def _input_error(op: str, message: str, *, path: Path) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="INVALID_INPUT", message=message, detail={"path": str(path)}),
    )

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

VALIDATION_ERROR_CODE = "validation_error"


@dataclass(frozen=True, slots=True)
class ReinfateError(Exception):
    """
    ReinfateError — error returned to API clients and printed by CLI commands.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - apps/api/common/errors.py
      - src/reinfate/contexts/tables/application/use_cases/errors.py
      - apps/cli/commands/tables.py

    Payload shape is `{"error": {"code", "message", "details"}}`. For validation errors
    `details.errors` lists `path/code/message` items in the order they were produced and
    `details.grid` may carry the grid the user was editing.
    """

    code: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        code = self.code.strip()
        message = self.message.strip()
        if not code:
            raise ValueError("ReinfateError.code must be non-empty")
        if not message:
            raise ValueError("ReinfateError.message must be non-empty")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "details", _json_mapping(self.details or {}))

    @classmethod
    def validation(
        cls,
        *,
        message: str,
        errors: Sequence[Mapping[str, Any]] = (),
        extra_details: Mapping[str, Any] | None = None,
    ) -> ReinfateError:
        """
        Build `validation_error` from issue items and optional extra payload.

        Args:
            message: Summary of the failure.
            errors: Items with at least `path`, `code` and `message` keys.
            extra_details: Additional keys placed next to `errors` (e.g. `grid`).
        Returns:
            ReinfateError: Error with code `validation_error`.
        Assumptions:
            Items come from `TableValidationIssue.to_payload()` or snapshot/request errors.
        Raises:
            ValueError: If one item misses `path`, `code` or `message`.
        Side Effects:
            None.
        """
        details: dict[str, Any] = dict(extra_details or {})
        if errors:
            for position, item in enumerate(errors):
                missing = [key for key in ("path", "code", "message") if key not in item]
                if missing:
                    raise ValueError(f"error item #{position} misses keys {missing}")
            details["errors"] = [dict(item) for item in errors]
        return cls(code=VALIDATION_ERROR_CODE, message=message, details=details)

    @property
    def is_validation(self) -> bool:
        return self.code == VALIDATION_ERROR_CODE

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(self.details),
            }
        }


def _json_mapping(value: Mapping[str, Any]) -> dict[str, Any]:
    # Ключи сортируются, порядок элементов списков сохраняется.
    return {str(key): _json_value(value[key]) for key in sorted(value, key=str)}


def _json_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return _json_mapping(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    raise TypeError(f"ReinfateError.details cannot hold {type(value).__name__}")

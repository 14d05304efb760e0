from __future__ import annotations

from typing import Any, Mapping, Sequence

from reinfate.contexts.tables.domain.errors import TablesDomainError, TablesSnapshotError
from reinfate.contexts.tables.domain.value_objects import TableValidationIssue
from reinfate.platform.errors import ReinfateError

from .edit_tables import SubmitTablesResult

_INVALID_INPUT_MESSAGE = "Invalid tables input"


def validation_error(
    *,
    message: str,
    errors: Sequence[Mapping[str, Any]] | None = None,
    extra_details: Mapping[str, Any] | None = None,
) -> ReinfateError:
    """
    Build `validation_error` ReinfateError keeping item order.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/platform/errors/reinfate_error.py
      - apps/api/common/errors.py

    Args:
        message: Human-readable validation failure message.
        errors: Optional validation items with `path`, `code`, `message`.
        extra_details: Optional additional details (e.g. preserved grid payload).
    Returns:
        ReinfateError: Canonical validation error.
    Assumptions:
        Items arrive in producer order, which is already deterministic.
    Raises:
        ValueError: If one item misses `path`, `code` or `message`.
    Side Effects:
        None.
    """
    return ReinfateError.validation(
        message=message,
        errors=errors or (),
        extra_details=extra_details,
    )


def issues_payload(issues: Sequence[TableValidationIssue]) -> list[dict[str, Any]]:
    return [issue.to_payload() for issue in issues]


def tables_submit_rejected(*, result: SubmitTablesResult) -> ReinfateError:
    """
    Convert rejected submit result into `validation_error` carrying the preserved grid.

    Args:
        result: Rejected submit result.
    Returns:
        ReinfateError: Validation error with `details.errors` and `details.grid`.
    Assumptions:
        Caller checked `result.accepted is False`.
    Raises:
        ValueError: If result is accepted.
    Side Effects:
        None.
    """
    if result.accepted:
        raise ValueError("tables_submit_rejected requires rejected result")
    return validation_error(
        message="Tables validation failed",
        errors=issues_payload(result.issues),
        extra_details={"grid": result.view.grid.to_payload()},
    )


def map_tables_exception(*, error: Exception) -> ReinfateError:
    """
    Map known tables exceptions to canonical ReinfateError contract.

    Args:
        error: Caught exception.
    Returns:
        ReinfateError: Canonical mapped error.
    Assumptions:
        Unknown exceptions are mapped to generic `unexpected_error`.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(error, ReinfateError):
        return error

    if isinstance(error, TablesSnapshotError):
        return validation_error(message=str(error) or _INVALID_INPUT_MESSAGE, errors=error.errors)

    if isinstance(error, (TablesDomainError, ValueError)):
        return validation_error(message=str(error) or _INVALID_INPUT_MESSAGE)

    return ReinfateError(
        code="unexpected_error",
        message="Unexpected tables operation error",
        details={"reason": str(error)},
    )

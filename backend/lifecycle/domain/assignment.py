"""Team assignment preconditions and deadline checks.

Pure domain functions. The evaluation instant is always passed in as `now`;
nothing here reads the clock.
"""

from datetime import datetime, timezone
from typing import Any

from lifecycle.domain.results import RejectionKind, ValidationResult


def parse_deadline(value: datetime | str | None) -> datetime | None:
    """Parse a deadline into an aware datetime.

    Accepts datetimes and ISO-8601 strings (a trailing "Z" included). Naive
    values are read as UTC.

    Raises:
        ValueError: If value is a blank string or not a valid date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("Empty date string")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_team_assignment(
    team_id: Any,
    deadline: datetime | str | None,
    difficulty: Any,
    *,
    now: datetime,
) -> ValidationResult:
    """Check the data required to assign a team to a project.

    Pure function -- no side effects, no clock reads.

    Args:
        team_id: Team being assigned
        deadline: Project deadline (datetime or ISO string)
        difficulty: Project difficulty level
        now: Evaluation instant

    Returns:
        ValidationResult, rejected with PRECONDITION on the first failure

    Rules (in order):
        - team must be selected
        - deadline must be present
        - difficulty must be present
        - deadline must parse and lie strictly after now
    """
    if not team_id:
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Team must be selected")

    if not deadline:
        return ValidationResult.reject(
            RejectionKind.PRECONDITION,
            "Deadline is required when assigning a team",
        )

    if not difficulty:
        return ValidationResult.reject(
            RejectionKind.PRECONDITION,
            "Difficulty level is required when assigning a team",
        )

    try:
        deadline_at = parse_deadline(deadline)
    except ValueError:
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Invalid deadline date")

    if deadline_at <= _aware(now):
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Deadline must be in the future")

    return ValidationResult.ok()


def validate_deadline(value: datetime | str | None, *, now: datetime) -> ValidationResult:
    """Check that value is a valid date strictly in the future."""
    if not value:
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Date is required")

    try:
        parsed = parse_deadline(value)
    except ValueError:
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Invalid date format")

    if parsed <= _aware(now):
        return ValidationResult.reject(RejectionKind.PRECONDITION, "Date must be in the future")

    return ValidationResult.ok()


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment

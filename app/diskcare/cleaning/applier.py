"""Apply a clean plan by moving eligible targets to the Trash.

Nothing is ever deleted outright: each eligible path is handed to the
platform trash individually, with failures isolated per path.
"""

import errno
import logging
from collections.abc import Callable, Sequence

from send2trash import send2trash

from diskcare.cleaning.models import ApplyResult, ApplyStatus, ApplySummary, CleanPlan
from diskcare.utils.text import error_message, to_one_line, truncate

logger = logging.getLogger(__name__)

TrashFn = Callable[[str], None]

DRY_RUN_MESSAGE = "Dry-run enabled; nothing was moved to Trash."
CONFIRMATION_MESSAGE = "Confirmation required (--yes); nothing was moved to Trash."
MISSING_MESSAGE = "Path missing at apply time; nothing was moved to Trash."

_TRASH_ERROR_TRUNCATE_LIMIT = 200
_MISSING_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


def can_apply(*, apply: bool, dry_run: bool, yes: bool) -> bool:
    """Check if a plan may actually be applied.

    Applying requires all three of ``--apply``, ``--no-dry-run`` and ``--yes``.
    """
    return apply and not dry_run and yes


def _is_missing(exc: OSError) -> bool:
    return isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno in _MISSING_ERRNOS


def _trash_single(item_id: str, path: str, estimated_bytes: int, trash_fn: TrashFn) -> ApplyResult:
    try:
        trash_fn(path)
    except OSError as e:
        if _is_missing(e):
            logger.info("Skipped %s: path vanished before apply", path)
            return ApplyResult(
                id=item_id,
                path=path,
                status=ApplyStatus.SKIPPED,
                estimated_bytes=estimated_bytes,
                message=MISSING_MESSAGE,
            )
        logger.warning("Failed to trash %s: %s", path, e)
        return ApplyResult(
            id=item_id,
            path=path,
            status=ApplyStatus.FAILED,
            estimated_bytes=estimated_bytes,
            message=truncate(
                f"trash failed: {to_one_line(error_message(e))}", _TRASH_ERROR_TRUNCATE_LIMIT
            ),
        )

    logger.info("Moved %s to Trash", path)
    return ApplyResult(
        id=item_id,
        path=path,
        status=ApplyStatus.TRASHED,
        estimated_bytes=estimated_bytes,
    )


def apply_plan(
    plan: CleanPlan,
    *,
    yes: bool,
    trash_fn: TrashFn | None = None,
) -> list[ApplyResult]:
    """Apply the eligible items of a plan.

    When apply was not requested, nothing is recorded. When it was
    requested but the gates are not all open, every eligible item is
    recorded as skipped with the reason.

    Args:
        plan: Plan to apply.
        yes: Whether the user confirmed with ``--yes``.
        trash_fn: Function moving one path to the Trash (defaults to send2trash).

    Returns:
        One ApplyResult per eligible item, in plan order.
    """
    if not plan.apply:
        return []

    eligible = plan.eligible_items
    if not can_apply(apply=plan.apply, dry_run=plan.dry_run, yes=yes):
        message = DRY_RUN_MESSAGE if plan.dry_run else CONFIRMATION_MESSAGE
        return [
            ApplyResult(
                id=item.id,
                path=item.path,
                status=ApplyStatus.SKIPPED,
                estimated_bytes=item.estimated_bytes,
                message=message,
            )
            for item in eligible
        ]

    do_trash = trash_fn or send2trash
    return [
        _trash_single(item.id, item.path, item.estimated_bytes, do_trash) for item in eligible
    ]


def summarize_apply(results: Sequence[ApplyResult], *, applied: bool) -> ApplySummary:
    """Aggregate apply results.

    Args:
        results: Results returned by apply_plan.
        applied: Whether the gates allowed the plan to be applied.

    Returns:
        ApplySummary; all zeros when nothing was applied.
    """
    if not applied:
        return ApplySummary()

    trashed = [r for r in results if r.status == ApplyStatus.TRASHED]
    return ApplySummary(
        trashed=len(trashed),
        failed=sum(1 for r in results if r.status == ApplyStatus.FAILED),
        trashed_estimated_bytes=sum(r.estimated_bytes for r in trashed),
    )

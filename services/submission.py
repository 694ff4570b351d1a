from __future__ import annotations

import logging
from dataclasses import dataclass

from schemas.submission import SubmissionSchema
from services.client_id import ClientIdGenerator
from services.normalizer import DEFAULT_TIMEZONE
from services.row_projector import project_submission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetNames:
    policies: str
    plans: str
    payments: str


@dataclass(frozen=True)
class SubmissionResult:
    client_id: str
    folder_name: str


async def submit_submission(
    submission: SubmissionSchema,
    sheets,
    client_ids: ClientIdGenerator,
    sheet_names: SheetNames,
    tz_name: str = DEFAULT_TIMEZONE,
) -> SubmissionResult:
    """
    Write one submission: policy rows, then plan rows, then the payment row.
    There is no rollback; a failure after the first append leaves earlier rows in place.
    """
    client_id = client_ids.new_id()
    rows = project_submission(submission, client_id, tz_name=tz_name)

    await sheets.append_rows(sheet_names.policies, rows.policies)
    if rows.plans:
        await sheets.append_rows(sheet_names.plans, rows.plans)
    if rows.payments:
        await sheets.append_rows(sheet_names.payments, rows.payments)

    logger.info(
        "Submission %s stored: %d policy, %d plan, %d payment row(s)",
        client_id,
        len(rows.policies),
        len(rows.plans),
        len(rows.payments),
    )
    return SubmissionResult(
        client_id=client_id,
        folder_name=submission.folder_name,
    )

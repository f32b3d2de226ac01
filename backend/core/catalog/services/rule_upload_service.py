from __future__ import annotations

import csv
import io
import logging
import uuid
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from catalog.models import Rule
from events.models import Event
from events.services import record_event
from tenancy.access import AccessContext, validate_carrier_access
from tenancy.exceptions import AccessDenied

logger = logging.getLogger(__name__)

MIN_UPLOAD_COLUMNS = 3


@dataclass
class RuleUploadReport:
    upload_id: str
    created: int = 0
    updated: int = 0
    failed: int = 0
    errors: list[dict] = field(default_factory=list)

    def fail(self, row: int, message: str) -> None:
        self.failed += 1
        self.errors.append({"row": row, "message": message})

    def as_dict(self) -> dict:
        return {
            "upload_id": self.upload_id,
            "status": "completed",
            "created": self.created,
            "updated": self.updated,
            "failed": self.failed,
            "errors": self.errors,
            "report_url": f"/api/uploads/{self.upload_id}/report",
        }


def _read_rows(uploaded_file) -> list[list[str]]:
    content = uploaded_file.read()
    if isinstance(content, bytes):
        content = content.decode("utf-8-sig")
    reader = csv.reader(io.StringIO(content))
    rows = list(reader)
    # The first line is a header.
    return rows[1:]


def _apply_row(*, access: AccessContext, fields: list[str], overwrite: bool, report: RuleUploadReport, row: int) -> None:
    if len(fields) < MIN_UPLOAD_COLUMNS:
        report.fail(row, "Insufficient columns")
        return

    rule_id = fields[0].strip()
    if not rule_id:
        report.fail(row, "Rule id is required")
        return

    title = fields[1].strip()
    description = fields[2].strip() or None
    existing = Rule.objects.filter(pk=rule_id).first()

    if existing is not None:
        # Another carrier's rule id reports the access error, never "already exists".
        try:
            validate_carrier_access(access, existing.carrier_id)
        except AccessDenied as exc:
            report.fail(row, str(exc.detail))
            return
        if not overwrite:
            report.fail(row, "Rule already exists")
            return
        existing.title = title
        existing.description = description
        existing.updated_at = timezone.now()
        existing.save(update_fields=["title", "description", "updated_at"])
        report.updated += 1
        return

    Rule.objects.create(
        rule_id=rule_id,
        title=title,
        description=description,
        status=Rule.STATUS_ACTIVE,
        carrier_id=None if access.is_super_admin else access.carrier_id,
        created_by=access.user_id,
    )
    report.created += 1


def upload_rules(*, access: AccessContext, uploaded_file, overwrite: bool = False, request=None) -> dict:
    """Import rules from a CSV file of `rule_id,title,description` rows.

    Row numbers in the report start at 1 after the header; problems with the
    file as a whole are reported on row 0.
    """

    report = RuleUploadReport(upload_id=str(uuid.uuid4()))

    try:
        rows = _read_rows(uploaded_file)
    except (UnicodeDecodeError, csv.Error) as exc:
        logger.warning("rule upload %s unreadable: %s", report.upload_id, exc)
        report.fail(0, f"File processing error: {exc}")
        rows = []

    with transaction.atomic():
        for row_number, fields in enumerate(rows, start=1):
            try:
                with transaction.atomic():
                    _apply_row(
                        access=access,
                        fields=fields,
                        overwrite=overwrite,
                        report=report,
                        row=row_number,
                    )
            except (DatabaseError, DjangoValidationError, ValueError) as exc:
                report.fail(row_number, str(exc))

        record_event(
            actor=access,
            action=Event.ACTION_UPLOAD,
            metadata={
                "resource": "rule_upload",
                "upload_id": report.upload_id,
                "overwrite": overwrite,
                "created": report.created,
                "updated": report.updated,
                "failed": report.failed,
            },
            request=request,
        )

    logger.info(
        "rule upload %s finished: created=%s updated=%s failed=%s by=%s",
        report.upload_id,
        report.created,
        report.updated,
        report.failed,
        access.user_id,
    )
    return report.as_dict()

"""/v1/exports - Bill list download and the import template"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from starlette.responses import Response

from tradebill.api.dependencies import get_clock, get_policy, get_request_id
from tradebill.infrastructure.database.session import get_db
from tradebill.infrastructure.database.repositories import BillRepository
from tradebill.domain.csv_export import bills_to_csv, import_template_csv
from tradebill.domain.interest import Clock, InterestPolicy, calculate_bills

router = APIRouter()


def _csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/exports/csv")
def export_bills(
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """
    Download every bill as CSV, newest first.

    The file re-imports through POST /v1/imports/csv.
    """
    bills = BillRepository(db).list_bills()
    if not bills:
        raise HTTPException(status_code=404, detail="There are no bills to download.")

    content = bills_to_csv(calculate_bills(bills, clock=clock, policy=policy))
    logging.info("Bill list exported", extra={"request_id": get_request_id(request), "rows": len(bills)})
    return _csv_attachment(content, "bill_list.csv")


@router.get("/exports/template")
def download_template():
    """Header row and one sample bill for filling in offline"""
    return _csv_attachment(import_template_csv(), "bill_import_template.csv")

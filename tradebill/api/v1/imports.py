"""POST /v1/imports/csv - Bulk bill import from a spreadsheet export"""

import logging
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from tradebill.api.v1.schemas import CsvImportResponse
from tradebill.api.dependencies import get_request_id
from tradebill.infrastructure.database.session import get_db
from tradebill.infrastructure.database.repositories import BillRepository
from tradebill.domain.csv_import import parse_bills_csv
from tradebill.domain.exceptions import InvalidBillDataError
from tradebill.infrastructure.observability.metrics import record_csv_import
from tradebill.infrastructure.observability.logging import log_import

router = APIRouter()


@router.post("/imports/csv", response_model=CsvImportResponse)
async def import_csv(
    request: Request,
    file: UploadFile = File(..., description="CSV with billDate, billNo, party, ... headers"),
    db: Session = Depends(get_db),
):
    """
    Import bills from CSV.

    Rows with unreadable dates are skipped and counted; the rest are inserted
    in one transaction.
    """
    request_id = get_request_id(request)
    content = await file.read()

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded")

    try:
        result = parse_bills_csv(text)
        imported = BillRepository(db).create_bills(result.bills)
        db.commit()

    except InvalidBillDataError as e:
        db.rollback()
        logging.warning(f"CSV import rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_csv_import(imported, result.skipped)
    log_import(request_id, file.filename or "", imported, result.skipped)

    return CsvImportResponse(imported=imported, skipped=result.skipped)

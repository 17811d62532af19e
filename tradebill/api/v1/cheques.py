"""POST /v1/cheques/scan - Pre-fill receipt fields from a cheque photo"""

import logging
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from tradebill.api.v1.schemas import ChequeScanResponse
from tradebill.api.dependencies import get_cheque_scanner, get_request_id
from tradebill.infrastructure.clients.cheque import ChequeScanner
from tradebill.domain.exceptions import ChequeExtractionError

router = APIRouter()

ACCEPTED_IMAGE_TYPES = {"image/jpeg", "image/png"}


@router.post("/cheques/scan", response_model=ChequeScanResponse)
async def scan_cheque(
    request: Request,
    file: UploadFile = File(..., description="JPEG or PNG photo of the cheque"),
    scanner: ChequeScanner = Depends(get_cheque_scanner),
):
    """
    Extract party, company, date, amount, cheque number and bank from a cheque.

    Values are suggestions for the receipt form; nothing is saved.
    """
    request_id = get_request_id(request)

    if file.content_type not in ACCEPTED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Cheque image must be JPEG or PNG")

    image = await file.read()
    if not image:
        raise HTTPException(status_code=400, detail="Cheque image is empty")

    try:
        cheque = await scanner.extract(image, mime_type=file.content_type)
    except ChequeExtractionError as e:
        logging.error(f"Cheque scan failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    logging.info("Cheque scanned", extra={"request_id": request_id, "step": "cheque_scan"})
    return ChequeScanResponse.from_domain(cheque)

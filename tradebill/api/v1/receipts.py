"""/v1/receipts - Split one payment across bills and record it"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tradebill.api.v1.schemas import (
    AllocationRequest,
    AllocationResponse,
    AllocationSchema,
    CalculatedBillOut,
    ReceiptRequest,
    ReceiptResponse,
)
from tradebill.api.dependencies import get_clock, get_policy, get_request_id
from tradebill.infrastructure.database.session import get_db
from tradebill.infrastructure.database.repositories import BillRepository
from tradebill.domain.allocation import allocate_receipt
from tradebill.domain.interest import Clock, InterestPolicy, calculate_bills
from tradebill.domain.exceptions import BillNotFoundError
from tradebill.infrastructure.observability.metrics import receipts_recorded_counter
from tradebill.infrastructure.observability.logging import log_receipt
from tradebill.utils.date_utils import parse_bill_date

router = APIRouter()


@router.post("/receipts/allocate", response_model=AllocationResponse)
def preview_allocation(body: AllocationRequest, db: Session = Depends(get_db)):
    """
    Show how a receipt would be split across bills without saving anything.

    Shares follow each bill's net amount; the last bill takes the rounding remainder.
    """
    try:
        bills = BillRepository(db).get_bills_by_ids(body.bill_ids)
    except BillNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    allocations = allocate_receipt(body.amount, bills)
    return AllocationResponse(
        amount=body.amount,
        allocations=[AllocationSchema(bill_id=a.bill_id, amount=a.amount) for a in allocations],
    )


@router.post("/receipts", response_model=ReceiptResponse)
def record_receipt(
    body: ReceiptRequest,
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """
    Record a receipt against one or more bills.

    Flow:
    1. Load the bills in request order
    2. Split the amount proportionally to net amounts
    3. Set receipt date, amount and interest flag on each bill
    4. Return the recalculated bills
    """
    request_id = get_request_id(request)
    repo = BillRepository(db)
    rec_date = parse_bill_date(body.rec_date)

    try:
        bills = repo.get_bills_by_ids(body.bill_ids)
        allocations = allocate_receipt(body.amount, bills)

        updated = [
            repo.record_receipt(
                bill_id=allocation.bill_id,
                rec_date=rec_date,
                rec_amount=allocation.amount,
                interest_paid=body.interest_paid,
                cheque_number=body.cheque_number,
                bank_name=body.bank_name,
            )
            for allocation in allocations
        ]
        db.commit()

    except BillNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Empty only if ReceiptRequest stops enforcing amount > 0 and a non-empty bill_ids
    if allocations:
        receipts_recorded_counter.inc()
        log_receipt(request_id, [a.bill_id for a in allocations], body.amount, body.interest_paid)

    return ReceiptResponse(
        allocations=[AllocationSchema(bill_id=a.bill_id, amount=a.amount) for a in allocations],
        bills=[CalculatedBillOut.from_domain(b) for b in calculate_bills(updated, clock=clock, policy=policy)],
    )

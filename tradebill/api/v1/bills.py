"""/v1/bills - Bill store CRUD with calculated aging and interest"""

import logging
from typing import Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from tradebill.api.v1.schemas import BillIn, BillListResponse, CalculatedBillOut, ReminderResponse
from tradebill.api.dependencies import get_clock, get_policy, get_reminder_templates, get_request_id
from tradebill.infrastructure.database.session import get_db
from tradebill.infrastructure.database.repositories import BillRepository
from tradebill.domain.interest import Clock, InterestPolicy, calculate_bill, calculate_bills
from tradebill.domain.exceptions import BillNotFoundError, InvalidBillDataError
from tradebill.domain.models import BillStatus
from tradebill.domain.reminders import ReminderKind, build_reminder
from tradebill.infrastructure.observability.metrics import record_bill_statuses

router = APIRouter()


@router.get("/bills", response_model=BillListResponse)
def list_bills(
    party: Optional[str] = Query(None, description="Only bills for this party"),
    status: Optional[BillStatus] = Query(None, description="Only bills in this status"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """
    List bills with total days, interest days, interest amount and status.

    Bills are ordered by bill date, newest first. Figures are recomputed on
    every call; nothing derived is stored.
    """
    bills = BillRepository(db).list_bills(party=party)
    calculated = calculate_bills(bills, clock=clock, policy=policy)
    record_bill_statuses(calculated)

    if status is not None:
        calculated = [b for b in calculated if b.status == status]

    return BillListResponse(
        interest_policy=policy.name,
        count=len(calculated),
        bills=[CalculatedBillOut.from_domain(b) for b in calculated],
    )


@router.post("/bills", response_model=CalculatedBillOut, status_code=201)
def create_bill(
    body: BillIn,
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """Record a new bill"""
    request_id = get_request_id(request)
    try:
        bill = BillRepository(db).create_bill(body.to_domain())
        db.commit()
    except InvalidBillDataError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    logging.info("Bill created", extra={"request_id": request_id, "bill_id": bill.id})
    return CalculatedBillOut.from_domain(calculate_bill(bill, clock=clock, policy=policy))


@router.get("/bills/{bill_id}", response_model=CalculatedBillOut)
def get_bill(
    bill_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """Fetch one bill with its calculated figures"""
    try:
        bill = BillRepository(db).get_bill(bill_id)
    except BillNotFoundError:
        raise HTTPException(status_code=404, detail="Bill not found")

    return CalculatedBillOut.from_domain(calculate_bill(bill, clock=clock, policy=policy))


@router.get("/bills/{bill_id}/reminder", response_model=ReminderResponse)
def get_reminder(
    bill_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
    templates: Dict[ReminderKind, str] = Depends(get_reminder_templates),
):
    """
    Reminder message for a bill, worded by its state.

    No receipt yet -> outstanding bill notice; receipt with interest due ->
    pending interest notice; settled -> thanks for payment.
    """
    try:
        bill = BillRepository(db).get_bill(bill_id)
    except BillNotFoundError:
        raise HTTPException(status_code=404, detail="Bill not found")

    reminder = build_reminder(calculate_bill(bill, clock=clock, policy=policy), templates)
    return ReminderResponse.from_domain(reminder)


@router.put("/bills/{bill_id}", response_model=CalculatedBillOut)
def update_bill(
    bill_id: int,
    body: BillIn,
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """Replace a bill's editable fields"""
    request_id = get_request_id(request)
    try:
        bill = BillRepository(db).update_bill(bill_id, body.to_domain(bill_id))
        db.commit()
    except BillNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bill not found")
    except InvalidBillDataError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    logging.info("Bill updated", extra={"request_id": request_id, "bill_id": bill_id})
    return CalculatedBillOut.from_domain(calculate_bill(bill, clock=clock, policy=policy))


@router.delete("/bills/{bill_id}", status_code=204)
def delete_bill(bill_id: int, request: Request, db: Session = Depends(get_db)):
    """Delete one bill"""
    try:
        BillRepository(db).delete_bill(bill_id)
        db.commit()
    except BillNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bill not found")

    logging.info("Bill deleted", extra={"request_id": get_request_id(request), "bill_id": bill_id})
    return Response(status_code=204)


@router.delete("/bills")
def clear_bills(request: Request, db: Session = Depends(get_db)):
    """Delete every bill in the store"""
    deleted = BillRepository(db).clear_all()
    db.commit()

    logging.warning("All bills cleared", extra={"request_id": get_request_id(request), "deleted": deleted})
    return {"deleted": deleted}

"""GET /v1/dashboard - Totals and overdue exposure by party"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tradebill.api.v1.schemas import DashboardResponse
from tradebill.api.dependencies import get_clock, get_policy
from tradebill.infrastructure.database.session import get_db
from tradebill.infrastructure.database.repositories import BillRepository
from tradebill.domain.interest import Clock, InterestPolicy, calculate_bills
from tradebill.domain.summary import summarize_bills

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """Summary cards plus overdue parties, largest exposure first"""
    calculated = calculate_bills(BillRepository(db).list_bills(), clock=clock, policy=policy)
    return DashboardResponse.from_domain(summarize_bills(calculated))

"""POST /v1/calculate - Live recalculation for the bill form"""

from fastapi import APIRouter, Depends

from tradebill.api.v1.schemas import BillDraft, CalculatedBillOut
from tradebill.api.dependencies import get_clock, get_policy
from tradebill.domain.interest import Clock, InterestPolicy, calculate_bill

router = APIRouter()


@router.post("/calculate", response_model=CalculatedBillOut)
def calculate(
    body: BillDraft,
    clock: Clock = Depends(get_clock),
    policy: InterestPolicy = Depends(get_policy),
):
    """
    Calculate aging and interest for an unsaved bill.

    Called on every edit of the form, so incomplete input is fine: a missing
    or unreadable bill date gives zero days and zero interest.
    """
    return CalculatedBillOut.from_domain(calculate_bill(body.to_domain(), clock=clock, policy=policy))

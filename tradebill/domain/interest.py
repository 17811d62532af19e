"""Bill aging and interest engine - core business logic for overdue interest"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional

from tradebill.config import settings
from tradebill.domain.exceptions import UnknownInterestPolicyError
from tradebill.domain.models import Bill, BillStatus, CalculatedBill
from tradebill.utils.date_utils import parse_bill_date

Clock = Callable[[], date]

DAYS_PER_YEAR = 365


def system_clock() -> date:
    """Today's date from the host clock"""
    return date.today()


@dataclass(frozen=True)
class AnnualRatePolicy:
    """
    Simple interest at an annual percentage rate, accrued per day.

    interest = net_amount * rate / 100 / 365 * interest_days

    Bills without their own rate use ``default_rate``.
    """

    default_rate: float
    name: str = "annual_rate"

    def interest_for(self, bill: Bill, interest_days: int) -> float:
        rate = bill.interest_rate if bill.interest_rate is not None else self.default_rate
        return bill.net_amount * (rate / 100) / DAYS_PER_YEAR * interest_days


@dataclass(frozen=True)
class FixedDailyRatePolicy:
    """
    Flat daily multiplier, ignoring any per-bill rate.

    interest = net_amount * daily_rate * interest_days

    The default 0.0004765/day is roughly 17.4% a year.
    """

    daily_rate: float
    name: str = "fixed_daily"

    def interest_for(self, bill: Bill, interest_days: int) -> float:
        return bill.net_amount * self.daily_rate * interest_days


InterestPolicy = AnnualRatePolicy | FixedDailyRatePolicy


def get_interest_policy(name: Optional[str] = None) -> InterestPolicy:
    """
    Resolve a policy by name, defaulting to the configured one.

    Raises:
        UnknownInterestPolicyError: name is not annual_rate or fixed_daily
    """
    policies: Dict[str, Callable[[], InterestPolicy]] = {
        "annual_rate": lambda: AnnualRatePolicy(default_rate=settings.default_interest_rate),
        "fixed_daily": lambda: FixedDailyRatePolicy(daily_rate=settings.fixed_daily_rate),
    }
    key = name or settings.interest_policy
    if key not in policies:
        raise UnknownInterestPolicyError(
            f"Unknown interest policy '{key}', expected one of {sorted(policies)}"
        )
    return policies[key]()


def determine_status(has_receipt: bool, interest_paid: str, total_days: int, credit_days: int) -> BillStatus:
    """
    Map receipt state and age to a bill status.

    - receipt recorded, interest paid      -> settled
    - receipt recorded, interest not paid  -> paid-interest-pending
    - no receipt, past credit window       -> overdue
    - no receipt, within credit window     -> pending
    """
    if has_receipt:
        if interest_paid == "Yes":
            return BillStatus.SETTLED
        return BillStatus.PAID_INTEREST_PENDING
    if total_days > credit_days:
        return BillStatus.OVERDUE
    return BillStatus.PENDING


def calculate_bill(
    bill: Bill,
    clock: Clock = system_clock,
    policy: Optional[InterestPolicy] = None,
) -> CalculatedBill:
    """
    Derive total days, interest days, interest amount and status for a bill.

    Never raises for a well-formed Bill: an unparseable bill date gives
    total_days = 0, and an unparseable receipt date counts as no receipt.
    The clock is only consulted when there is no receipt date.
    """
    if policy is None:
        policy = get_interest_policy()

    bill_date = parse_bill_date(bill.bill_date)
    rec_date = parse_bill_date(bill.rec_date)

    total_days = 0
    if bill_date is not None:
        end_date = rec_date if rec_date is not None else clock()
        total_days = (end_date - bill_date).days

    interest_days = max(0, total_days - bill.credit_days)
    interest_amount = policy.interest_for(bill, interest_days)

    status = determine_status(
        has_receipt=rec_date is not None,
        interest_paid=bill.interest_paid,
        total_days=total_days,
        credit_days=bill.credit_days,
    )

    return CalculatedBill.from_bill(
        bill,
        total_days=total_days,
        interest_days=interest_days,
        interest_amount=interest_amount,
        status=status,
    )


def calculate_bills(
    bills: Iterable[Bill],
    clock: Clock = system_clock,
    policy: Optional[InterestPolicy] = None,
) -> List[CalculatedBill]:
    """
    Calculate every bill independently, preserving input order.

    "Today" is read once so all bills in one listing share the same end date.
    """
    if policy is None:
        policy = get_interest_policy()

    today: Optional[date] = None

    def frozen_clock() -> date:
        nonlocal today
        if today is None:
            today = clock()
        return today

    return [calculate_bill(bill, clock=frozen_clock, policy=policy) for bill in bills]


def round_currency(amount: float) -> float:
    """Round to paise for display; the engine itself never rounds"""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

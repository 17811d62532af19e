"""Unit tests for bill aging and interest calculation"""

import pytest
from datetime import date, timedelta
from tradebill.domain.models import Bill, BillStatus
from tradebill.domain.exceptions import UnknownInterestPolicyError
from tradebill.domain.interest import (
    AnnualRatePolicy,
    FixedDailyRatePolicy,
    calculate_bill,
    calculate_bills,
    determine_status,
    get_interest_policy,
    round_currency,
)


def frozen(day: date):
    return lambda: day


def test_received_bill_scenario(annual_policy):
    """Bill received 75 days after issue on 30 credit days, interest unpaid"""
    bill = Bill(
        id=1,
        bill_date="01/04/2024",
        net_amount=15000,
        credit_days=30,
        rec_date="15/06/2024",
        interest_paid="No",
    )

    result = calculate_bill(bill, clock=frozen(date(2030, 1, 1)), policy=annual_policy)

    assert result.total_days == 75
    assert result.interest_days == 45
    assert result.status == BillStatus.PAID_INTEREST_PENDING
    # 15000 * 18% / 365 * 45
    assert result.interest_amount == pytest.approx(121500 / 365)
    assert round_currency(result.interest_amount) == 332.88


def test_received_bill_scenario_fixed_daily_policy():
    bill = Bill(id=1, bill_date="01/04/2024", net_amount=15000, credit_days=30, rec_date="15/06/2024")

    result = calculate_bill(bill, policy=FixedDailyRatePolicy(daily_rate=0.0004765))

    # 15000 * 0.0004765 * 45
    assert result.interest_amount == pytest.approx(321.6375)


def test_unreceipted_bill_pending_then_overdue(annual_policy):
    """Credit window of 60 days from 20 May ends 19 July"""
    bill = Bill(id=2, bill_date="20/05/2024", rec_date=None, credit_days=60, net_amount=42000, interest_paid="No")

    before = calculate_bill(bill, clock=frozen(date(2024, 7, 1)), policy=annual_policy)
    assert before.total_days == 42
    assert before.interest_days == 0
    assert before.interest_amount == 0
    assert before.status == BillStatus.PENDING

    after = calculate_bill(bill, clock=frozen(date(2024, 8, 1)), policy=annual_policy)
    assert after.total_days == 73
    assert after.interest_days == 13
    assert after.status == BillStatus.OVERDUE
    assert round_currency(after.interest_amount) == 269.26


def test_last_day_of_credit_window_is_not_overdue(annual_policy):
    bill = Bill(id=3, bill_date="2024-05-20", credit_days=60, net_amount=1000)

    on_boundary = calculate_bill(bill, clock=frozen(date(2024, 7, 19)), policy=annual_policy)
    day_after = calculate_bill(bill, clock=frozen(date(2024, 7, 20)), policy=annual_policy)

    assert on_boundary.total_days == 60
    assert on_boundary.status == BillStatus.PENDING
    assert day_after.status == BillStatus.OVERDUE
    assert day_after.interest_days == 1


def test_interest_days_never_negative(annual_policy):
    """Paid inside the credit window"""
    bill = Bill(id=4, bill_date="01/06/2024", credit_days=90, net_amount=5000, rec_date="10/06/2024")

    result = calculate_bill(bill, policy=annual_policy)

    assert result.total_days == 9
    assert result.interest_days == 0
    assert result.interest_amount == 0


def test_receipt_before_bill_date_keeps_signed_days(annual_policy):
    bill = Bill(id=5, bill_date="10/06/2024", credit_days=0, net_amount=5000, rec_date="01/06/2024")

    result = calculate_bill(bill, policy=annual_policy)

    assert result.total_days == -9
    assert result.interest_days == 0


@pytest.mark.parametrize("has_receipt", [False, True])
def test_missing_bill_date_degrades_to_zero(annual_policy, has_receipt):
    bill = Bill(
        id=6,
        bill_date="",
        credit_days=30,
        net_amount=10000,
        rec_date="15/06/2024" if has_receipt else None,
    )

    result = calculate_bill(bill, clock=frozen(date(2024, 7, 1)), policy=annual_policy)

    assert result.total_days == 0
    assert result.interest_days == 0
    assert result.interest_amount == 0
    expected = BillStatus.PAID_INTEREST_PENDING if has_receipt else BillStatus.PENDING
    assert result.status == expected


def test_unparseable_receipt_date_counts_as_unpaid(annual_policy):
    bill = Bill(id=7, bill_date="01/01/2024", credit_days=30, net_amount=1000, rec_date="sometime")

    result = calculate_bill(bill, clock=frozen(date(2024, 3, 1)), policy=annual_policy)

    assert result.total_days == 60
    assert result.status == BillStatus.OVERDUE


def test_zero_credit_days(annual_policy):
    bill = Bill(id=8, bill_date="2024-06-01", credit_days=0, net_amount=36500, interest_rate=10)

    result = calculate_bill(bill, clock=frozen(date(2024, 6, 11)), policy=annual_policy)

    assert result.interest_days == 10
    # 36500 * 10% / 365 * 10
    assert result.interest_amount == pytest.approx(100.0)


def test_negative_credit_days_extend_interest(annual_policy):
    """Out-of-range input is computed, not rejected"""
    bill = Bill(id=9, bill_date="2024-06-01", credit_days=-5, net_amount=1000, rec_date="2024-06-03")

    result = calculate_bill(bill, policy=annual_policy)

    assert result.interest_days == 7


def test_bill_rate_overrides_default(annual_policy):
    bill = Bill(id=10, bill_date="2024-01-01", credit_days=0, net_amount=36500, rec_date="2024-01-11", interest_rate=24)

    result = calculate_bill(bill, policy=annual_policy)

    assert result.interest_amount == pytest.approx(240.0)


def test_zero_bill_rate_is_respected(annual_policy):
    bill = Bill(id=11, bill_date="2024-01-01", credit_days=0, net_amount=36500, rec_date="2024-01-11", interest_rate=0)

    assert calculate_bill(bill, policy=annual_policy).interest_amount == 0


def test_fixed_daily_ignores_bill_rate():
    bill = Bill(id=12, bill_date="2024-01-01", credit_days=0, net_amount=10000, rec_date="2024-01-11", interest_rate=99)

    result = calculate_bill(bill, policy=FixedDailyRatePolicy(daily_rate=0.001))

    assert result.interest_amount == pytest.approx(100.0)


def test_received_bill_is_deterministic(annual_policy):
    """Clock must not matter once a receipt date exists"""
    bill = Bill(id=13, bill_date="01/04/2024", net_amount=15000, credit_days=30, rec_date="15/06/2024")

    first = calculate_bill(bill, clock=frozen(date(2024, 7, 1)), policy=annual_policy)
    second = calculate_bill(bill, clock=frozen(date(2031, 12, 31)), policy=annual_policy)

    assert first == second


def test_interest_monotonic_in_elapsed_days(annual_policy):
    bill = Bill(id=14, bill_date="2024-01-01", net_amount=50000, credit_days=30)

    previous = None
    for offset in range(0, 120):
        result = calculate_bill(bill, clock=frozen(date(2024, 1, 1) + timedelta(days=offset)), policy=annual_policy)
        if previous is not None:
            assert result.interest_days >= previous.interest_days
            assert result.interest_amount >= previous.interest_amount
        previous = result


def test_passthrough_fields_unchanged(annual_policy):
    bill = Bill(
        id=15,
        bill_date="01/04/2024",
        bill_no="B-9",
        party="Om Traders",
        company_name="Jay Mills",
        mobile="919800000000",
        cheque_number="004512",
        bank_name="SBI",
        pes="P1",
        meter="120",
        rate=42.5,
    )

    result = calculate_bill(bill, clock=frozen(date(2024, 4, 2)), policy=annual_policy)

    assert result.bill_date == "01/04/2024"
    assert result.bill_no == "B-9"
    assert result.company_name == "Jay Mills"
    assert result.cheque_number == "004512"
    assert result.rate == 42.5


@pytest.mark.parametrize(
    "has_receipt,interest_paid,total_days,credit_days,expected",
    [
        (False, "No", 10, 30, BillStatus.PENDING),
        (False, "Yes", 10, 30, BillStatus.PENDING),
        (False, "No", 31, 30, BillStatus.OVERDUE),
        (False, "Yes", 31, 30, BillStatus.OVERDUE),
        (True, "No", 10, 30, BillStatus.PAID_INTEREST_PENDING),
        (True, "No", 90, 30, BillStatus.PAID_INTEREST_PENDING),
        (True, "Yes", 10, 30, BillStatus.SETTLED),
        (True, "Yes", 90, 30, BillStatus.SETTLED),
    ],
)
def test_status_table(has_receipt, interest_paid, total_days, credit_days, expected):
    assert determine_status(has_receipt, interest_paid, total_days, credit_days) == expected


def test_only_exact_yes_marks_interest_paid():
    assert determine_status(True, "yes", 0, 0) == BillStatus.PAID_INTEREST_PENDING


def test_calculate_bills_preserves_order(sample_bills, clock, annual_policy):
    results = calculate_bills(sample_bills, clock=clock, policy=annual_policy)

    assert [r.id for r in results] == [b.id for b in sample_bills]
    assert [r.status for r in results] == [
        BillStatus.PENDING,
        BillStatus.OVERDUE,
        BillStatus.OVERDUE,
        BillStatus.PAID_INTEREST_PENDING,
        BillStatus.SETTLED,
    ]


def test_calculate_bills_reads_clock_once(sample_bills, annual_policy):
    calls = []

    def counting_clock():
        calls.append(1)
        return date(2024, 7, 1)

    calculate_bills(sample_bills, clock=counting_clock, policy=annual_policy)

    assert len(calls) == 1


def test_calculate_bills_empty():
    assert calculate_bills([]) == []


def test_get_interest_policy_by_name():
    assert isinstance(get_interest_policy("annual_rate"), AnnualRatePolicy)
    assert isinstance(get_interest_policy("fixed_daily"), FixedDailyRatePolicy)


def test_get_interest_policy_unknown():
    with pytest.raises(UnknownInterestPolicyError):
        get_interest_policy("compound")


def test_round_currency_half_up():
    assert round_currency(2.675) == 2.68
    assert round_currency(0.005) == 0.01
    assert round_currency(100) == 100.0

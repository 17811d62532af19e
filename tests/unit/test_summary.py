"""Unit tests for dashboard summaries"""

from tradebill.domain.interest import calculate_bills
from tradebill.domain.summary import summarize_bills


def test_summarize_bills_totals(sample_bills, clock, annual_policy):
    summary = summarize_bills(calculate_bills(sample_bills, clock=clock, policy=annual_policy))

    assert summary.total_entries == 5
    assert summary.total_net_amount == 100000
    assert summary.overdue_amount == 65000  # Bills 2 and 3
    assert summary.total_interest_amount > 0


def test_summarize_bills_overdue_parties_sorted(sample_bills, clock, annual_policy):
    summary = summarize_bills(calculate_bills(sample_bills, clock=clock, policy=annual_policy))

    assert [(p.party, p.bill_count, p.total_amount) for p in summary.overdue_parties] == [
        ("Om Traders", 1, 40000),
        ("Shree Textiles", 1, 25000),
    ]


def test_summarize_bills_groups_by_party(sample_bills, clock, annual_policy):
    def december():
        # Bill 1 is overdue by then
        return clock().replace(month=12)

    summary = summarize_bills(calculate_bills(sample_bills, clock=december, policy=annual_policy))

    shree = next(p for p in summary.overdue_parties if p.party == "Shree Textiles")
    assert shree.bill_count == 2
    assert shree.total_amount == 37000


def test_summarize_bills_empty():
    summary = summarize_bills([])

    assert summary.total_entries == 0
    assert summary.total_net_amount == 0
    assert summary.overdue_amount == 0
    assert summary.overdue_parties == []

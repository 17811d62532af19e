"""Dashboard aggregates over calculated bills"""

from typing import Dict, List

from tradebill.domain.models import BillStatus, BillSummary, CalculatedBill, OverdueParty


def summarize_bills(bills: List[CalculatedBill]) -> BillSummary:
    """
    Totals for the dashboard cards plus the overdue-by-party breakdown.

    Overdue parties are sorted by total overdue net amount, largest first.
    """
    overdue_bills = [b for b in bills if b.status == BillStatus.OVERDUE]

    by_party: Dict[str, OverdueParty] = {}
    for bill in overdue_bills:
        entry = by_party.setdefault(bill.party, OverdueParty(party=bill.party, bill_count=0, total_amount=0.0))
        entry.bill_count += 1
        entry.total_amount += bill.net_amount

    overdue_parties = sorted(by_party.values(), key=lambda p: p.total_amount, reverse=True)

    return BillSummary(
        total_entries=len(bills),
        total_net_amount=sum(b.net_amount for b in bills),
        overdue_amount=sum(b.net_amount for b in overdue_bills),
        total_interest_amount=sum(b.interest_amount for b in bills),
        overdue_parties=overdue_parties,
    )

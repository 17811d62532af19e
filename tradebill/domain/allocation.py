"""Proportional allocation of a single receipt across several bills"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from tradebill.domain.models import Bill, ReceiptAllocation


def to_minor_units(amount: float) -> int:
    """Rupees to paise, rounding half-up"""
    return int(Decimal(str(amount)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def allocate_receipt(amount: float, bills: Sequence[Bill]) -> List[ReceiptAllocation]:
    """
    Split one payment across bills in proportion to their net amounts.

    Requirements:
    - Share of each bill = amount * net_amount / total net amount
    - Computed in paise; every bill but the last is floored
    - Last bill absorbs rounding remainder so the shares sum exactly to amount
    - Zero total net amount falls back to an equal split

    Args:
        amount: Receipt amount in rupees
        bills: Bills the receipt covers, in allocation order

    Returns:
        One ReceiptAllocation per bill, same order as ``bills``

    Example:
        Rs. 100.00 over net amounts [1000, 2000, 3000]
        10000 paise -> 1666, 3333, remainder 5001
    """
    if amount <= 0 or not bills:
        return []

    amount_minor = to_minor_units(amount)
    weights = [max(to_minor_units(bill.net_amount), 0) for bill in bills]
    total_weight = sum(weights)

    if total_weight == 0:
        # Nothing to weight by, split evenly
        weights = [1] * len(bills)
        total_weight = len(bills)

    shares = []
    allocated = 0
    for i, weight in enumerate(weights):
        if i == len(weights) - 1:
            share = amount_minor - allocated
        else:
            share = amount_minor * weight // total_weight
        allocated += share
        shares.append(share)

    return [
        ReceiptAllocation(bill_id=bill.id, amount=share / 100)
        for bill, share in zip(bills, shares)
    ]

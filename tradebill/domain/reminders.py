"""Payment reminder messages built from calculated bills"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, Optional
from urllib.parse import quote

from tradebill.domain.models import BillStatus, CalculatedBill
from tradebill.utils.date_utils import parse_bill_date


class ReminderKind(str, Enum):
    """Which template a bill's reminder uses"""

    NO_REC_DATE = "no-rec-date"
    PENDING_INTEREST = "pending-interest"
    PAYMENT_THANKS = "payment-thanks"


DEFAULT_TEMPLATES: Dict[ReminderKind, str] = {
    ReminderKind.NO_REC_DATE: (
        "Outstanding Bill\n\n"
        "Dear [Party],\n"
        "My Bill No. [Bill No], Dt: [Bill Date],\n"
        "Rs. [Netamount], Total Days: [Total Days].\n"
        "Interest days.[interest days], \n"
        "Int. Rs.[Interest amt].\n\n"
        "From: [Company]\n\n"
        "Dear Sir, this bill is overdue. Please make payment."
    ),
    ReminderKind.PENDING_INTEREST: (
        "Pending Interest\n\n"
        "Dear [Party],\n"
        "Bill No. [Bill No], Dt: [Bill Date],\n"
        "Rec Rs. [Recamount], Rec Dt: [Rec Date]\n"
        "Total Days: [Total Days], Interest Days: [Interest Days],\n"
        "Interest Rs. [Interest Amount]\n\n"
        "Pay this bill's pending interest and close full payment.\n\n"
        "From: [Company]."
    ),
    ReminderKind.PAYMENT_THANKS: (
        "Thanks For Payment\n\n"
        "Dear [Party],\n"
        "Bill No. [Bill No], Dt: [Bill Date],\n"
        "Rec Rs. [Recamount],\n"
        "Rec Dt: [Rec Date]\n"
        "Total Days: [Total Days], \n"
        "Interest Days: [Interest Days],\n"
        "Interest Rs. [Interest Amount]\n\n"
        "We Proud Work with You..."
    ),
}

WHATSAPP_BASE_URL = "https://wa.me"


@dataclass
class Reminder:
    """Rendered reminder for one bill"""

    bill_id: Optional[int]
    kind: ReminderKind
    message: str
    whatsapp_url: str


def reminder_kind(bill: CalculatedBill) -> ReminderKind:
    """No receipt yet, receipt with interest outstanding, or fully settled"""
    if bill.status in (BillStatus.PENDING, BillStatus.OVERDUE):
        return ReminderKind.NO_REC_DATE
    if bill.status == BillStatus.PAID_INTEREST_PENDING:
        return ReminderKind.PENDING_INTEREST
    return ReminderKind.PAYMENT_THANKS


def format_inr(amount: float) -> str:
    """
    Indian digit grouping, at most two decimals, trailing zeros dropped.

    Example:
        125000    -> "1,25,000"
        332.8767  -> "332.88"
        1234567.5 -> "12,34,567.5"
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")

    # Last three digits, then groups of two
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    fraction = fraction.rstrip("0")
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def _display_date(value: Optional[str]) -> str:
    parsed = parse_bill_date(value)
    if parsed is None:
        return value or ""
    return parsed.strftime("%d/%m/%Y")


def _placeholders(bill: CalculatedBill) -> Dict[str, str]:
    # Both spellings of the interest placeholders appear in saved templates
    return {
        "[Party]": bill.party,
        "[Bill No]": bill.bill_no,
        "[Bill Date]": _display_date(bill.bill_date),
        "[Netamount]": format_inr(bill.net_amount),
        "[Total Days]": str(bill.total_days),
        "[interest days]": str(bill.interest_days),
        "[Interest Days]": str(bill.interest_days),
        "[Interest amt]": format_inr(bill.interest_amount),
        "[Interest Amount]": format_inr(bill.interest_amount),
        "[Company]": bill.company_name,
        "[Recamount]": format_inr(bill.rec_amount),
        "[Rec Date]": _display_date(bill.rec_date),
    }


def render_message(template: str, bill: CalculatedBill) -> str:
    """Fill every known placeholder; unknown bracketed text is left as is"""
    message = template
    for placeholder, value in _placeholders(bill).items():
        message = message.replace(placeholder, value)
    return message


def whatsapp_link(mobile: str, message: str) -> str:
    digits = "".join(ch for ch in mobile if ch.isdigit())
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(message, safe='')}"


def build_reminder(bill: CalculatedBill, templates: Optional[Dict[ReminderKind, str]] = None) -> Reminder:
    """
    Pick the template for the bill's state and render it.

    Args:
        bill: Calculated bill (status decides the template)
        templates: Overrides by kind; missing kinds use DEFAULT_TEMPLATES

    Returns:
        Reminder with the message and a wa.me link for the bill's mobile
    """
    kind = reminder_kind(bill)
    template = (templates or {}).get(kind) or DEFAULT_TEMPLATES[kind]
    message = render_message(template, bill)
    return Reminder(
        bill_id=bill.id,
        kind=kind,
        message=message,
        whatsapp_url=whatsapp_link(bill.mobile, message),
    )

"""Domain models - pure Python dataclasses representing business entities"""

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional
from tradebill.utils.date_utils import format_bill_date, parse_bill_date

_AMOUNT = re.compile(r"\d[\d,]*(?:\.\d+)?")


class BillStatus(str, Enum):
    """Lifecycle state of a bill, recomputed on every calculation"""

    PENDING = "pending"
    OVERDUE = "overdue"
    PAID_INTEREST_PENDING = "paid-interest-pending"
    SETTLED = "settled"


@dataclass(frozen=True)
class Bill:
    """Trade bill as held by the bill store"""

    id: Optional[int]
    bill_date: Optional[str]  # Any encoding accepted by parse_bill_date
    bill_no: str = ""
    party: str = ""
    company_name: str = ""
    net_amount: float = 0.0
    credit_days: int = 0
    rec_date: Optional[str] = None  # None means not yet received
    rec_amount: float = 0.0
    interest_paid: str = "No"  # "Yes" | "No"
    interest_rate: Optional[float] = None  # Annual %, None falls back to settings
    mobile: str = ""
    cheque_number: str = ""
    bank_name: str = ""
    pes: str = ""
    meter: str = ""
    rate: float = 0.0  # Unit rate, not used in interest calculation


@dataclass(frozen=True)
class CalculatedBill(Bill):
    """Bill plus derived aging and interest figures"""

    total_days: int = 0
    interest_days: int = 0
    interest_amount: float = 0.0
    status: BillStatus = BillStatus.PENDING

    @classmethod
    def from_bill(cls, bill: Bill, **derived) -> "CalculatedBill":
        values = {f.name: getattr(bill, f.name) for f in fields(Bill)}
        return cls(**values, **derived)


@dataclass
class ReceiptAllocation:
    """Share of a single receipt attributed to one bill"""

    bill_id: Optional[int]
    amount: float


@dataclass
class OverdueParty:
    """Overdue exposure for one party"""

    party: str
    bill_count: int
    total_amount: float


@dataclass
class BillSummary:
    """Dashboard aggregates over a set of calculated bills"""

    total_entries: int
    total_net_amount: float
    overdue_amount: float
    total_interest_amount: float
    overdue_parties: List[OverdueParty] = field(default_factory=list)


@dataclass
class ChequeData:
    """Candidate receipt fields read off a cheque image"""

    party_name: str = ""
    company_name: str = ""
    date: str = ""
    amount: str = ""
    cheque_number: str = ""
    bank_name: str = ""

    def to_receipt_fields(self) -> Dict[str, Any]:
        """Map scanned values onto the bill fields a receipt form pre-fills"""
        result: Dict[str, Any] = {
            "party": self.party_name,
            "company_name": self.company_name,
            "cheque_number": self.cheque_number,
            "bank_name": self.bank_name,
        }

        parsed = parse_bill_date(self.date)
        if parsed:
            result["rec_date"] = format_bill_date(parsed)

        # Amounts come back as "Rs. 12,500.00" and similar
        match = _AMOUNT.search(self.amount or "")
        result["rec_amount"] = float(match.group(0).replace(",", "")) if match else 0.0

        return result

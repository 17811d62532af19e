"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Literal, Optional

from tradebill.domain.interest import round_currency
from tradebill.domain.models import Bill, BillSummary, CalculatedBill, ChequeData
from tradebill.domain.reminders import Reminder
from tradebill.utils.date_utils import parse_bill_date


class BillDraft(BaseModel):
    """Bill fields as typed into the calculator form; nothing is required"""

    bill_date: Optional[str] = Field(None, description="DD/MM/YYYY, YYYY-MM-DD or ISO timestamp")
    bill_no: str = ""
    party: str = ""
    company_name: str = ""
    net_amount: float = Field(0.0, ge=0)
    credit_days: int = Field(0, ge=0)
    rec_date: Optional[str] = None
    rec_amount: float = Field(0.0, ge=0)
    interest_paid: Literal["Yes", "No"] = "No"
    interest_rate: Optional[float] = Field(None, ge=0, description="Annual %")
    mobile: str = ""
    cheque_number: str = ""
    bank_name: str = ""
    pes: str = ""
    meter: str = ""
    rate: float = 0.0

    def to_domain(self, bill_id: Optional[int] = None) -> Bill:
        return Bill(id=bill_id, **self.model_dump())


class BillIn(BillDraft):
    """Request body for POST/PUT /v1/bills"""

    bill_date: str = Field(..., min_length=1, description="DD/MM/YYYY, YYYY-MM-DD or ISO timestamp")
    bill_no: str = Field(..., min_length=1)
    party: str = Field(..., min_length=1)

    @field_validator("bill_date")
    @classmethod
    def bill_date_must_parse(cls, value: str) -> str:
        if parse_bill_date(value) is None:
            raise ValueError(f"unrecognised date '{value}'")
        return value

    @field_validator("rec_date")
    @classmethod
    def rec_date_must_parse(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if parse_bill_date(value) is None:
            raise ValueError(f"unrecognised date '{value}'")
        return value


class CalculatedBillOut(BaseModel):
    """Bill with aging and interest figures, amounts rounded to paise"""

    id: Optional[int] = None
    bill_date: Optional[str]
    bill_no: str
    party: str
    company_name: str
    net_amount: float
    credit_days: int
    rec_date: Optional[str]
    rec_amount: float
    interest_paid: str
    interest_rate: Optional[float]
    mobile: str
    cheque_number: str
    bank_name: str
    pes: str
    meter: str
    rate: float
    total_days: int
    interest_days: int
    interest_amount: float
    status: Literal["pending", "overdue", "paid-interest-pending", "settled"]

    @classmethod
    def from_domain(cls, bill: CalculatedBill) -> "CalculatedBillOut":
        values = asdict(bill)
        values["interest_amount"] = round_currency(bill.interest_amount)
        values["status"] = bill.status.value
        return cls(**values)


class BillListResponse(BaseModel):
    """Response for GET /v1/bills"""

    interest_policy: str
    count: int
    bills: List[CalculatedBillOut]


class OverduePartySchema(BaseModel):
    party: str
    bill_count: int
    total_amount: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    total_entries: int
    total_net_amount: float
    overdue_amount: float
    total_interest_amount: float
    overdue_parties: List[OverduePartySchema]

    @classmethod
    def from_domain(cls, summary: BillSummary) -> "DashboardResponse":
        return cls(
            total_entries=summary.total_entries,
            total_net_amount=round_currency(summary.total_net_amount),
            overdue_amount=round_currency(summary.overdue_amount),
            total_interest_amount=round_currency(summary.total_interest_amount),
            overdue_parties=[
                OverduePartySchema(
                    party=p.party,
                    bill_count=p.bill_count,
                    total_amount=round_currency(p.total_amount),
                )
                for p in summary.overdue_parties
            ],
        )


class AllocationRequest(BaseModel):
    """Request body for POST /v1/receipts/allocate"""

    amount: float = Field(..., gt=0, description="Receipt amount in rupees")
    bill_ids: List[int] = Field(..., min_length=1)

    @field_validator("bill_ids")
    @classmethod
    def bill_ids_must_be_unique(cls, value: List[int]) -> List[int]:
        if len(set(value)) != len(value):
            raise ValueError("bill_ids must not repeat")
        return value


class AllocationSchema(BaseModel):
    bill_id: int
    amount: float


class AllocationResponse(BaseModel):
    """Response for POST /v1/receipts/allocate"""

    amount: float
    allocations: List[AllocationSchema]


class ReceiptRequest(AllocationRequest):
    """Request body for POST /v1/receipts"""

    rec_date: str = Field(..., min_length=1)
    interest_paid: Literal["Yes", "No"] = "No"
    cheque_number: str = ""
    bank_name: str = ""

    @field_validator("rec_date")
    @classmethod
    def rec_date_must_parse(cls, value: str) -> str:
        if parse_bill_date(value) is None:
            raise ValueError(f"unrecognised date '{value}'")
        return value


class ReceiptResponse(BaseModel):
    """Response for POST /v1/receipts"""

    allocations: List[AllocationSchema]
    bills: List[CalculatedBillOut]


class CsvImportResponse(BaseModel):
    """Response for POST /v1/imports/csv"""

    imported: int
    skipped: int


class ChequeScanResponse(BaseModel):
    """Response for POST /v1/cheques/scan"""

    party_name: str
    company_name: str
    date: str
    amount: str
    cheque_number: str
    bank_name: str
    receipt_fields: Dict[str, Any]

    @classmethod
    def from_domain(cls, cheque: ChequeData) -> "ChequeScanResponse":
        return cls(**asdict(cheque), receipt_fields=cheque.to_receipt_fields())


class ReminderResponse(BaseModel):
    """Response for GET /v1/bills/{bill_id}/reminder"""

    bill_id: Optional[int]
    kind: Literal["no-rec-date", "pending-interest", "payment-thanks"]
    message: str
    whatsapp_url: str

    @classmethod
    def from_domain(cls, reminder: Reminder) -> "ReminderResponse":
        return cls(
            bill_id=reminder.bill_id,
            kind=reminder.kind.value,
            message=reminder.message,
            whatsapp_url=reminder.whatsapp_url,
        )

"""Data access layer for bills"""

from datetime import date
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from tradebill.infrastructure.database.models import BillRecord
from tradebill.domain.exceptions import BillNotFoundError, InvalidBillDataError
from tradebill.domain.models import Bill
from tradebill.utils.date_utils import format_bill_date, parse_bill_date

# Columns copied verbatim between Bill and BillRecord
_PLAIN_FIELDS = (
    "bill_no",
    "party",
    "company_name",
    "net_amount",
    "credit_days",
    "rec_amount",
    "interest_paid",
    "interest_rate",
    "mobile",
    "cheque_number",
    "bank_name",
    "pes",
    "meter",
    "rate",
)


def _to_domain(record: BillRecord) -> Bill:
    return Bill(
        id=record.id,
        bill_date=format_bill_date(record.bill_date),
        rec_date=format_bill_date(record.rec_date) if record.rec_date else None,
        **{name: getattr(record, name) for name in _PLAIN_FIELDS},
    )


def _parse_dates(bill: Bill) -> tuple[date, Optional[date]]:
    """Stored dates must parse; the calculator tolerates bad dates, the store does not"""
    bill_date = parse_bill_date(bill.bill_date)
    if bill_date is None:
        raise InvalidBillDataError(f"Invalid bill date: {bill.bill_date!r}")

    rec_date = parse_bill_date(bill.rec_date)
    if bill.rec_date and bill.rec_date.strip() and rec_date is None:
        raise InvalidBillDataError(f"Invalid receipt date: {bill.rec_date!r}")

    return bill_date, rec_date


class BillRepository:
    """Repository for trade bills"""

    def __init__(self, db: Session):
        self.db = db

    def create_bill(self, bill: Bill) -> Bill:
        """Persist a new bill, ignoring any id it carries"""
        bill_date, rec_date = _parse_dates(bill)
        record = BillRecord(
            bill_date=bill_date,
            rec_date=rec_date,
            **{name: getattr(bill, name) for name in _PLAIN_FIELDS},
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return _to_domain(record)

    def create_bills(self, bills: Iterable[Bill]) -> int:
        """Bulk insert, returns number of rows added"""
        count = 0
        for bill in bills:
            self.create_bill(bill)
            count += 1
        return count

    def update_bill(self, bill_id: int, bill: Bill) -> Bill:
        """Replace every editable field of an existing bill"""
        record = self._get_record(bill_id)
        bill_date, rec_date = _parse_dates(bill)
        record.bill_date = bill_date
        record.rec_date = rec_date
        for name in _PLAIN_FIELDS:
            setattr(record, name, getattr(bill, name))
        self.db.flush()
        return _to_domain(record)

    def record_receipt(
        self,
        bill_id: int,
        rec_date: date,
        rec_amount: float,
        interest_paid: str,
        cheque_number: str = "",
        bank_name: str = "",
    ) -> Bill:
        """Mark a bill as received; receipt fields are overwritten, not summed"""
        record = self._get_record(bill_id)
        record.rec_date = rec_date
        record.rec_amount = rec_amount
        record.interest_paid = interest_paid
        if cheque_number:
            record.cheque_number = cheque_number
        if bank_name:
            record.bank_name = bank_name
        self.db.flush()
        return _to_domain(record)

    def get_bill(self, bill_id: int) -> Bill:
        return _to_domain(self._get_record(bill_id))

    def get_bills_by_ids(self, bill_ids: List[int]) -> List[Bill]:
        """Fetch bills in the order requested; every id must exist"""
        records = self.db.query(BillRecord).filter(BillRecord.id.in_(bill_ids)).all()
        by_id = {r.id: r for r in records}
        missing = [i for i in bill_ids if i not in by_id]
        if missing:
            raise BillNotFoundError(missing[0])
        return [_to_domain(by_id[i]) for i in bill_ids]

    def list_bills(self, party: Optional[str] = None) -> List[Bill]:
        """All bills, newest bill date first"""
        query = self.db.query(BillRecord)
        if party:
            query = query.filter(BillRecord.party == party)
        records = query.order_by(BillRecord.bill_date.desc(), BillRecord.id.desc()).all()
        return [_to_domain(r) for r in records]

    def delete_bill(self, bill_id: int) -> None:
        record = self._get_record(bill_id)
        self.db.delete(record)
        self.db.flush()

    def clear_all(self) -> int:
        """Delete every bill, returns number of rows removed"""
        deleted = self.db.query(BillRecord).delete(synchronize_session=False)
        self.db.flush()
        return deleted

    def _get_record(self, bill_id: int) -> BillRecord:
        record = self.db.query(BillRecord).filter(BillRecord.id == bill_id).first()
        if record is None:
            raise BillNotFoundError(bill_id)
        return record

"""Bill sheet export and the blank import template"""

import io
from typing import Any, Dict, List, Tuple

import pandas as pd

from tradebill.domain.interest import round_currency
from tradebill.domain.models import CalculatedBill
from tradebill.utils.date_utils import parse_bill_date

# (sheet header, CalculatedBill attribute) in sheet column order
EXPORT_COLUMNS: List[Tuple[str, str]] = [
    ("billDate", "bill_date"),
    ("billNo", "bill_no"),
    ("party", "party"),
    ("pes", "pes"),
    ("meter", "meter"),
    ("rate", "rate"),
    ("netAmount", "net_amount"),
    ("totalDays", "total_days"),
    ("creditDays", "credit_days"),
    ("interestDays", "interest_days"),
    ("interestAmount", "interest_amount"),
    ("interestPaid", "interest_paid"),
    ("recDate", "rec_date"),
    ("recAmount", "rec_amount"),
    ("chequeNumber", "cheque_number"),
    ("bankName", "bank_name"),
    ("companyName", "company_name"),
    ("mobile", "mobile"),
    ("interestRate", "interest_rate"),
]

TEMPLATE_ROW: Dict[str, Any] = {
    "billDate": "01/04/2024",
    "billNo": "101",
    "party": "Sample Party Name",
    "pes": "Sample PES",
    "meter": "123 Mtr",
    "rate": 10.50,
    "netAmount": 15000.00,
    "totalDays": 0,
    "creditDays": 30,
    "interestDays": 0,
    "interestAmount": 0,
    "interestPaid": "No",
    "recDate": "15/04/2024",
    "recAmount": 15000.00,
    "chequeNumber": "123456",
    "bankName": "Sample Bank",
    "companyName": "Sample Company",
    "mobile": "9876543210",
    "interestRate": "",
}


def _sheet_date(value) -> str:
    parsed = parse_bill_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else ""


def _to_row(bill: CalculatedBill) -> Dict[str, Any]:
    row = {header: getattr(bill, attr) for header, attr in EXPORT_COLUMNS}
    row["billDate"] = _sheet_date(bill.bill_date)
    row["recDate"] = _sheet_date(bill.rec_date)
    row["interestAmount"] = round_currency(bill.interest_amount)
    row["status"] = bill.status.value
    return row


def _write(rows: List[Dict[str, Any]], columns: List[str]) -> str:
    buffer = io.StringIO()
    pd.DataFrame(rows, columns=columns).to_csv(buffer, index=False, na_rep="")
    return buffer.getvalue()


def bills_to_csv(bills: List[CalculatedBill]) -> str:
    """
    Render calculated bills as a sheet ``parse_bills_csv`` reads back.

    Dates are written DD/MM/YYYY; calculated columns (totalDays, interestDays,
    interestAmount, status) are included for reading and ignored on import.
    """
    columns = [header for header, _ in EXPORT_COLUMNS] + ["status"]
    return _write([_to_row(b) for b in bills], columns)


def import_template_csv() -> str:
    """Header row plus one sample bill"""
    return _write([TEMPLATE_ROW], [header for header, _ in EXPORT_COLUMNS])

"""Bill sheet import from CSV uploads"""

import io
import math
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from tradebill.domain.exceptions import InvalidBillDataError
from tradebill.domain.models import Bill
from tradebill.utils.date_utils import format_bill_date, parse_bill_date


@dataclass
class CsvImportResult:
    """Bills parsed from an upload and the number of rows rejected"""

    bills: List[Bill] = field(default_factory=list)
    skipped: int = 0


def _to_float(value: str) -> float:
    try:
        number = float(value.replace(",", ""))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_int(value: str) -> int:
    try:
        return int(float(value.replace(",", "")))
    except (ValueError, OverflowError):
        # OverflowError for "inf" and "1e400"
        return 0


def _to_optional_float(value: str) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _row_to_bill(row: Dict[str, str], line_number: int) -> Optional[Bill]:
    bill_date = parse_bill_date(row.get("billDate"))
    if bill_date is None:
        logging.warning(
            "Skipping CSV row with invalid billDate",
            extra={"line": line_number, "bill_date": row.get("billDate", "")},
        )
        return None

    raw_rec_date = row.get("recDate", "")
    rec_date = parse_bill_date(raw_rec_date) if raw_rec_date else None
    if raw_rec_date and rec_date is None:
        logging.warning(
            "Skipping CSV row with invalid recDate",
            extra={"line": line_number, "rec_date": raw_rec_date},
        )
        return None

    return Bill(
        id=None,
        bill_date=format_bill_date(bill_date),
        rec_date=format_bill_date(rec_date) if rec_date else None,
        bill_no=row.get("billNo", ""),
        party=row.get("party", ""),
        company_name=row.get("companyName", ""),
        mobile=row.get("mobile", ""),
        cheque_number=row.get("chequeNumber", ""),
        bank_name=row.get("bankName", ""),
        interest_paid="Yes" if row.get("interestPaid") == "Yes" else "No",
        net_amount=_to_float(row.get("netAmount", "")),
        credit_days=_to_int(row.get("creditDays", "")),
        rec_amount=_to_float(row.get("recAmount", "")),
        interest_rate=_to_optional_float(row.get("interestRate", "")),
        pes=row.get("pes", ""),
        meter=row.get("meter", ""),
        rate=_to_float(row.get("rate", "")),
    )


def parse_bills_csv(text: str) -> CsvImportResult:
    """
    Parse an exported bill sheet back into Bill records.

    Columns use the sheet's camelCase headers (billDate, billNo, party, ...).
    Rows with an unparseable billDate, or a recDate that is present but
    unparseable, are skipped and counted. Dates are stored as YYYY-MM-DD.

    Raises:
        InvalidBillDataError: no header, no data rows, or no valid rows
    """
    try:
        df = pd.read_csv(
            io.StringIO(text.strip()),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise InvalidBillDataError("CSV file must have a header row and at least one data row.") from e
    except pd.errors.ParserError as e:
        raise InvalidBillDataError(f"Could not parse CSV: {e}") from e

    if df.empty:
        raise InvalidBillDataError("CSV file must have a header row and at least one data row.")

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")

    result = CsvImportResult()
    # Line 1 is the header
    for line_number, row in enumerate(df.to_dict("records"), start=2):
        cleaned = {key: str(value).strip() for key, value in row.items()}
        bill = _row_to_bill(cleaned, line_number)
        if bill is None:
            result.skipped += 1
        else:
            result.bills.append(bill)

    if not result.bills:
        raise InvalidBillDataError("No valid bill data found to import.")

    return result

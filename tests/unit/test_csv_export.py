"""Unit tests for bill sheet export"""

import csv
import io
from dataclasses import replace
from tradebill.domain.csv_export import EXPORT_COLUMNS, bills_to_csv, import_template_csv
from tradebill.domain.csv_import import parse_bills_csv
from tradebill.domain.interest import calculate_bills


def read_rows(text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(text)))


def test_bills_to_csv_columns_and_dates(sample_bills, clock, annual_policy):
    text = bills_to_csv(calculate_bills(sample_bills, clock=clock, policy=annual_policy))

    header = text.splitlines()[0].split(",")
    assert header == [h for h, _ in EXPORT_COLUMNS] + ["status"]

    rows = read_rows(text)
    assert len(rows) == 5
    received = rows[3]
    assert received["billDate"] == "01/04/2024"
    assert received["recDate"] == "15/06/2024"
    assert received["interestDays"] == "45"
    assert received["interestAmount"] == "332.88"
    assert received["status"] == "paid-interest-pending"
    assert rows[0]["recDate"] == ""
    assert rows[0]["interestRate"] == ""


def test_exported_sheet_imports_back(sample_bills, clock, annual_policy):
    text = bills_to_csv(calculate_bills(sample_bills, clock=clock, policy=annual_policy))

    result = parse_bills_csv(text)

    assert result.skipped == 0
    assert [b.bill_no for b in result.bills] == [b.bill_no for b in sample_bills]
    received = result.bills[3]
    assert received.bill_date == "2024-04-01"
    assert received.rec_date == "2024-06-15"
    assert received.net_amount == 15000.0
    assert received.credit_days == 30
    assert received.interest_paid == "No"
    assert received.interest_rate is None


def test_bills_to_csv_keeps_text_columns_as_written(sample_bills, clock, annual_policy):
    bill = replace(sample_bills[0], cheque_number="004512", mobile="09876543210", interest_rate=12.5)
    text = bills_to_csv(calculate_bills([bill], clock=clock, policy=annual_policy))

    imported = parse_bills_csv(text).bills[0]

    assert imported.cheque_number == "004512"
    assert imported.mobile == "09876543210"
    assert imported.interest_rate == 12.5


def test_import_template_is_importable():
    text = import_template_csv()

    rows = read_rows(text)
    assert len(rows) == 1
    assert rows[0]["billDate"] == "01/04/2024"

    bill = parse_bills_csv(text).bills[0]
    assert bill.party == "Sample Party Name"
    assert bill.rec_date == "2024-04-15"
    assert bill.rate == 10.5

"""Prometheus metrics for bill aging, receipts, imports and cheque scans"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from tradebill.domain.models import CalculatedBill

# Bill metrics
bill_status_counter = Counter(
    "tradebill_bill_status_total",
    "Bills calculated, by resulting status",
    ["status"],  # pending | overdue | paid-interest-pending | settled
)

receipts_recorded_counter = Counter(
    "tradebill_receipts_recorded_total",
    "Receipts recorded against bills",
)

csv_rows_counter = Counter(
    "tradebill_csv_rows_total",
    "CSV import rows processed",
    ["outcome"],  # imported | skipped
)

# Cheque scan metrics
cheque_scan_latency_histogram = Histogram(
    "cheque_scan_latency_seconds",
    "Gemini cheque extraction response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

cheque_scan_counter = Counter(
    "cheque_scans_total",
    "Cheque scan attempts by outcome",
    ["outcome"],  # success | not_configured | timeout | http_error | network_error | invalid_response
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_bill_statuses(bills: Iterable[CalculatedBill]) -> None:
    """Count calculated bills by status for overdue-rate monitoring"""
    for bill in bills:
        bill_status_counter.labels(status=bill.status.value).inc()


def record_csv_import(imported: int, skipped: int) -> None:
    csv_rows_counter.labels(outcome="imported").inc(imported)
    csv_rows_counter.labels(outcome="skipped").inc(skipped)

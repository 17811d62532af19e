"""Dependency injection for FastAPI endpoints"""

from typing import Dict, Optional
from fastapi import HTTPException, Query, Request
from tradebill.config import settings
from tradebill.domain.exceptions import UnknownInterestPolicyError
from tradebill.domain.interest import Clock, InterestPolicy, get_interest_policy, system_clock
from tradebill.domain.reminders import ReminderKind
from tradebill.infrastructure.clients.cheque import ChequeScanner


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Clock:
    """Provide the clock used for unreceipted bills (overridden in tests)"""
    return system_clock


def get_policy(
    interest_policy: Optional[str] = Query(None, description="annual_rate | fixed_daily"),
) -> InterestPolicy:
    """Resolve the interest policy, allowing a per-request override"""
    try:
        return get_interest_policy(interest_policy)
    except UnknownInterestPolicyError as e:
        raise HTTPException(status_code=400, detail=str(e))


def get_reminder_templates() -> Dict[ReminderKind, str]:
    """Configured template overrides; kinds left blank use the defaults"""
    configured = {
        ReminderKind.NO_REC_DATE: settings.reminder_no_rec_date_template,
        ReminderKind.PENDING_INTEREST: settings.reminder_pending_interest_template,
        ReminderKind.PAYMENT_THANKS: settings.reminder_payment_thanks_template,
    }
    return {kind: template for kind, template in configured.items() if template}


def get_cheque_scanner() -> ChequeScanner:
    """Provide Gemini cheque scanner instance"""
    return ChequeScanner()

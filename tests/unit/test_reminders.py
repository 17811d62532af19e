"""Unit tests for reminder messages"""

import pytest
from dataclasses import replace
from urllib.parse import unquote
from tradebill.domain.interest import calculate_bill
from tradebill.domain.reminders import (
    DEFAULT_TEMPLATES,
    ReminderKind,
    build_reminder,
    format_inr,
    render_message,
    whatsapp_link,
)


@pytest.fixture
def calculated(sample_bills, clock, annual_policy):
    return {b.id: calculate_bill(b, clock=clock, policy=annual_policy) for b in sample_bills}


@pytest.mark.parametrize(
    "bill_id,kind",
    [
        (1, ReminderKind.NO_REC_DATE),  # pending
        (2, ReminderKind.NO_REC_DATE),  # overdue
        (4, ReminderKind.PENDING_INTEREST),
        (5, ReminderKind.PAYMENT_THANKS),
    ],
)
def test_template_follows_bill_state(calculated, bill_id, kind):
    assert build_reminder(calculated[bill_id]).kind == kind


def test_overdue_message_fills_placeholders(calculated):
    """Bill 2: 122 days old, 92 interest days, 25000 * 18% / 365 * 92"""
    message = build_reminder(calculated[2]).message

    assert "Dear Shree Textiles," in message
    assert "My Bill No. B-087, Dt: 01/03/2024," in message
    assert "Rs. 25,000, Total Days: 122." in message
    assert "Interest days.92," in message
    assert "Int. Rs.1,134.25." in message
    assert "[" not in message


def test_pending_interest_message(calculated):
    message = build_reminder(calculated[4]).message

    assert "Rec Rs. 15,000, Rec Dt: 15/06/2024" in message
    assert "Total Days: 75, Interest Days: 45," in message
    assert "Interest Rs. 332.88" in message


def test_custom_template_overrides_default(calculated):
    templates = {ReminderKind.PAYMENT_THANKS: "Thank you [Party] for [Recamount]"}

    reminder = build_reminder(calculated[5], templates)

    assert reminder.message == "Thank you Om Traders for 8,000"


def test_blank_override_falls_back_to_default(calculated):
    reminder = build_reminder(calculated[1], {ReminderKind.NO_REC_DATE: ""})

    assert reminder.message.startswith("Outstanding Bill")


def test_missing_receipt_date_renders_blank(calculated):
    message = render_message("Rec Dt: [Rec Date]|", calculated[1])

    assert message == "Rec Dt: |"


def test_unknown_placeholders_are_left_alone(calculated):
    assert render_message("[Party] [Unknown]", calculated[1]) == "Shree Textiles [Unknown]"


def test_whatsapp_link_uses_mobile_digits(calculated):
    bill = replace(calculated[4], mobile="+91 98765 43210")

    reminder = build_reminder(bill)

    assert reminder.whatsapp_url.startswith("https://wa.me/919876543210?text=")
    assert unquote(reminder.whatsapp_url.split("text=", 1)[1]) == reminder.message


def test_whatsapp_link_encodes_message():
    assert whatsapp_link("9876543210", "Dear A & B,\nPay") == "https://wa.me/9876543210?text=Dear%20A%20%26%20B%2C%0APay"


@pytest.mark.parametrize(
    "amount,expected",
    [
        (0, "0"),
        (999, "999"),
        (15000, "15,000"),
        (125000, "1,25,000"),
        (1234567.5, "12,34,567.5"),
        (332.8767, "332.88"),
        (0.005, "0.01"),
        (-2500, "-2,500"),
    ],
)
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_default_templates_cover_every_kind():
    assert set(DEFAULT_TEMPLATES) == set(ReminderKind)

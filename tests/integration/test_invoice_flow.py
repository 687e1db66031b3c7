"""End-to-end invoice flows against the real store and an in-memory database.

Only the Stripe gateway is mocked.
"""
import pytest

from membership_billing.services import invoice_store
from membership_billing.services.invoice_service import (
    create_empty_invoice,
    create_invoice,
    pay_for_invoice,
    paypal_charge_success,
)
from membership_billing.utils.errors import ChargeFailed, PaypalUpdateFailed

pytestmark = [pytest.mark.integration]

MEMBER_EMAIL = "sherlock@holmes.co.uk"


@pytest.mark.asyncio
async def test_signup_creates_invoice_with_reference(db_session, today):
    invoice = await create_empty_invoice(db_session, MEMBER_EMAIL, "full")

    assert invoice.id == 1
    assert invoice.reference == "FUL1"
    assert invoice.member_email == MEMBER_EMAIL
    assert invoice.total_amount_in_cents == 0
    assert invoice.payment_date == today
    assert invoice.payment_status == "Pending"


@pytest.mark.asyncio
async def test_card_payment_marks_invoice_paid(db_session, gateway, today):
    created = await create_empty_invoice(db_session, MEMBER_EMAIL, "full")

    paid = await pay_for_invoice(db_session, {
        "invoiceId": created.id,
        "totalAmount": 60,
        "paymentType": "stripe",
        "stripeToken": "tok_visa",
    })

    gateway.assert_awaited_once_with("tok_visa", 6000)
    assert paid.payment_status == "PAID"
    assert paid.transaction_id == "trans_1"
    assert paid.total_amount_in_cents == 6000
    assert paid.reference == "FUL1"


@pytest.mark.asyncio
async def test_declined_card_leaves_invoice_untouched(db_session, gateway, today):
    created = await create_empty_invoice(db_session, MEMBER_EMAIL, "full")
    gateway.side_effect = ChargeFailed("tok_chargeDeclined", "Your card was declined.")

    with pytest.raises(ChargeFailed):
        await pay_for_invoice(db_session, {
            "invoiceId": created.id,
            "totalAmount": 60,
            "paymentType": "stripe",
            "stripeToken": "tok_chargeDeclined",
        })

    invoice = await invoice_store.get_invoice(db_session, created.id)
    assert invoice.payment_status == "Pending"
    assert invoice.payment_type == ""
    assert invoice.transaction_id is None


@pytest.mark.asyncio
async def test_paypal_payment_reconciled_by_notification(db_session, today):
    created = await create_empty_invoice(db_session, MEMBER_EMAIL, "supporter")
    pending = await pay_for_invoice(db_session, {
        "invoiceId": created.id,
        "totalAmount": "1.00",
        "paymentType": "paypal",
    })
    assert pending.payment_status == "Pending"

    await paypal_charge_success(db_session, "8MC585209K746392H", created.id)

    invoice = await invoice_store.get_invoice(db_session, created.id)
    assert invoice.payment_status == "PAID"
    assert invoice.transaction_id == "8MC585209K746392H"
    assert invoice.reference == f"SUP{created.id}"


@pytest.mark.asyncio
async def test_paypal_notification_for_unknown_invoice(db_session):
    with pytest.raises(PaypalUpdateFailed) as exc_info:
        await paypal_charge_success(db_session, "8MC585209K746392H", 404)

    assert exc_info.value.affected == 0


@pytest.mark.asyncio
async def test_renewal_invoice_starts_pending_whatever_the_payload_says(db_session, today):
    invoice = await create_invoice(db_session, {
        "memberEmail": MEMBER_EMAIL,
        "membershipType": "full",
        "totalAmount": "60",
        "paymentType": "deposit",
        "paymentStatus": "PAID",
    })

    assert invoice.payment_status == "Pending"
    assert invoice.transaction_id is None
    assert invoice.total_amount_in_cents == 6000
    assert invoice.reference == f"FUL{invoice.id}"

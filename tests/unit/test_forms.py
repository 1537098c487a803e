import pytest

from storefront.forms import OrderForm, PaymentForm
from storefront.totals import compute_subtotal


def _order_form():
    return OrderForm([("serum", 2400), ("cream", 1850)])


def test_order_form_lines_and_reset():
    form = _order_form()
    form.set_quantity("serum", "2")
    assert compute_subtotal(form.lines()) == 4800

    form.reset()
    assert form.quantity("serum") == "0"
    assert compute_subtotal(form.lines()) == 0


def test_order_form_unknown_product():
    with pytest.raises(KeyError):
        _order_form().set_quantity("inconnu", 1)


def test_payment_form_requires_cardholder():
    form = PaymentForm(cardholder="  ")
    assert form.report_validity() is False
    assert form.validation_message == "Please enter the cardholder name."


def test_payment_form_checks_email_format_when_present():
    form = PaymentForm(cardholder="Ada Lovelace", email="not-an-email")
    assert form.report_validity() is False

    form.email = "ada@example.com"
    assert form.report_validity() is True
    assert form.validation_message is None

    form.email = ""
    assert form.report_validity() is True


def test_payment_form_reset():
    form = PaymentForm(cardholder="Ada", email="ada@example.com")
    form.reset()
    assert form.form_data() == {"cardholder": "", "email": ""}


@pytest.mark.parametrize("email", ["ada@example..com", "ada@-example.com", "a@b.c.", "ada@exa_mple.com"])
def test_payment_form_rejects_malformed_email(email):
    form = PaymentForm(cardholder="Ada", email=email)
    assert form.report_validity() is False
    assert form.validation_message == "Please enter a valid email address."

import math
import pytest

from backend.config import Settings
from backend.payments import service as payments_service
from backend.payments.errors import CheckoutError, PaymentConfigurationError, PaymentValidationError, ProcessorError
from backend.payments.models import PaymentRequest
from tests.fakes import FakeProcessor


def _request(**overrides):
    body = {"sourceId": "cnon:card-nonce-ok", "amount": 1500}
    body.update(overrides)
    return payments_service.parse_payment_request(body)


def test_parse_payment_request_ok():
    req = payments_service.parse_payment_request({
        "sourceId": "cnon:card-nonce-ok",
        "amount": 1500,
        "currency": "eur",
        "buyerEmail": "buyer@example.com",
        "note": "Commande test",
    })
    assert req.source_id == "cnon:card-nonce-ok"
    assert req.amount == 1500
    assert req.currency == "eur"
    assert req.buyer_email == "buyer@example.com"
    assert req.note == "Commande test"


@pytest.mark.parametrize("body", [
    {"amount": 1500},
    {"sourceId": "", "amount": 1500},
    {"sourceId": "   ", "amount": 1500},
    {"sourceId": None, "amount": 1500},
])
def test_missing_source_id_rejected(body):
    with pytest.raises(PaymentValidationError) as exc:
        payments_service.parse_payment_request(body)
    assert exc.value.status_code == 400
    assert exc.value.message == payments_service.MISSING_SOURCE_MESSAGE


@pytest.mark.parametrize("amount", [0, -5, 12.5, "1500", None, True, math.nan, math.inf])
def test_invalid_amount_rejected(amount):
    with pytest.raises(PaymentValidationError) as exc:
        payments_service.parse_payment_request({"sourceId": "tok", "amount": amount})
    assert exc.value.status_code == 400
    assert "positive integer" in exc.value.message


def test_source_checked_before_amount():
    # Les deux champs sont invalides: l'erreur sur le token passe en premier
    with pytest.raises(PaymentValidationError) as exc:
        payments_service.parse_payment_request({"amount": -1})
    assert exc.value.message == payments_service.MISSING_SOURCE_MESSAGE


def test_integral_float_amount_accepted():
    assert _request(amount=1500.0).amount == 1500


def test_non_object_body_rejected():
    with pytest.raises(PaymentValidationError):
        payments_service.parse_payment_request(["sourceId", 1500])


def test_empty_optional_fields_dropped():
    req = _request(buyerEmail="", note="  ", currency="")
    assert req.buyer_email is None
    assert req.note is None
    assert req.currency is None


def test_build_charge_uses_server_default_currency():
    charge = payments_service.build_charge_request(_request(), Settings(currency="USD"))
    assert charge.amount_money.amount == 1500
    assert charge.amount_money.currency == "USD"
    assert charge.autocomplete is True


def test_build_charge_currency_precedence_and_uppercase():
    settings = Settings(currency="CAD")
    assert payments_service.build_charge_request(_request(currency="eur"), settings).amount_money.currency == "EUR"
    assert payments_service.build_charge_request(_request(), settings).amount_money.currency == "CAD"
    assert payments_service.build_charge_request(_request(), Settings(currency="")).amount_money.currency == "USD"


def test_build_charge_generates_distinct_idempotency_keys():
    payment = _request()
    settings = Settings()
    first = payments_service.build_charge_request(payment, settings)
    second = payments_service.build_charge_request(payment, settings)
    assert first.idempotency_key and second.idempotency_key
    assert first.idempotency_key != second.idempotency_key


def test_square_body_omits_missing_optionals():
    body = payments_service.build_charge_request(_request(), Settings(), idempotency_key="key-1").to_square_body()
    assert body == {
        "source_id": "cnon:card-nonce-ok",
        "idempotency_key": "key-1",
        "amount_money": {"amount": 1500, "currency": "USD"},
        "autocomplete": True,
    }


def test_square_body_passes_buyer_email_and_note():
    payment = _request(buyerEmail="buyer@example.com", note="Commande")
    body = payments_service.build_charge_request(payment, Settings()).to_square_body()
    assert body["buyer_email_address"] == "buyer@example.com"
    assert body["note"] == "Commande"


@pytest.mark.parametrize("exc, expected", [
    (ProcessorError("HTTP 402", errors=[{"code": "CARD_DECLINED", "detail": "Card declined"}]), "Card declined"),
    (ProcessorError("Square API error (HTTP 500)", errors=[{"code": "INTERNAL_SERVER_ERROR"}]), "Square API error (HTTP 500)"),
    (PaymentConfigurationError(), "Square access token is not configured."),
    (RuntimeError("boom"), "boom"),
    (RuntimeError(), payments_service.FALLBACK_ERROR_MESSAGE),
])
def test_error_message_from(exc, expected):
    assert payments_service.error_message_from(exc) == expected


@pytest.mark.asyncio
async def test_create_payment_success():
    processor = FakeProcessor(payment={"id": "pay_1"})
    result = await payments_service.create_payment(_request(), Settings(), processor)
    assert result["message"] == payments_service.SUCCESS_MESSAGE
    assert result["payment"]["id"] == "pay_1"
    assert len(processor.charges) == 1
    assert processor.charges[0].amount_money.amount == 1500


@pytest.mark.asyncio
async def test_create_payment_translates_processor_failure():
    processor = FakeProcessor(error=ProcessorError("x", errors=[{"detail": "Card declined"}]))
    with pytest.raises(CheckoutError) as exc:
        await payments_service.create_payment(_request(), Settings(), processor)
    assert exc.value.status_code == 500
    assert exc.value.message == "Card declined"


@pytest.mark.asyncio
async def test_create_payment_translates_unexpected_error():
    processor = FakeProcessor(error=ValueError("unexpected"))
    with pytest.raises(CheckoutError) as exc:
        await payments_service.create_payment(_request(), Settings(), processor)
    assert exc.value.message == "unexpected"


def test_payment_request_model_accepts_wire_names():
    req = PaymentRequest.model_validate({"sourceId": "tok", "amount": 10, "buyerEmail": "a@b.co"})
    assert req.source_id == "tok"
    assert req.buyer_email == "a@b.co"

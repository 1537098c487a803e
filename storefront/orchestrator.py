"""
Orchestration du paiement côté client.

Machine à états par soumission:
    IDLE -> VALIDATING -> TOKENIZING -> SUBMITTING -> SUCCEEDED | FAILED

- VALIDATING: formulaire invalide ou total <= 0 -> retour à IDLE avec un message, aucun appel réseau
- TOKENIZING: token carte via PaymentClientAdapter
- SUBMITTING: POST /api/payments sur le backend
- SUCCEEDED: confirmation, formulaires remis à zéro, totaux recalculés
- FAILED: message d'erreur, formulaires conservés pour correction
Pas de relance automatique. Une soumission pendant qu'une autre est en cours est ignorée.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .card import PaymentClientAdapter, fetch_public_config
from .errors import CheckoutNetworkError, StorefrontError
from .forms import OrderForm, PaymentForm
from .totals import TotalsCalculator

logger = logging.getLogger(__name__)

PAYMENTS_PATH = "/api/payments"
EMPTY_ORDER_MESSAGE = "Add at least one product to your order before paying."
INVALID_FORM_MESSAGE = "Please complete the payment form."
PROCESSING_MESSAGE = "Processing payment…"
PAYMENT_FAILED_MESSAGE = "Payment failed."


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    TOKENIZING = "tokenizing"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PaymentStatus(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: str = "info"  # info | pending | success | error


@dataclass(frozen=True)
class PaymentResult:
    payment_id: str
    status: PaymentStatus
    message: str


def _error_from_response(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return PAYMENT_FAILED_MESSAGE
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return PAYMENT_FAILED_MESSAGE


class CheckoutOrchestrator:
    """
    Relie formulaire, totaux, tokenisation et backend.
    - http: client httpx dont base_url pointe sur le serveur de checkout
    """

    def __init__(
        self,
        *,
        order_form: OrderForm,
        payment_form: PaymentForm,
        card: PaymentClientAdapter,
        http: httpx.AsyncClient,
        calculator: Optional[TotalsCalculator] = None,
        store_name: str = "Storefront",
    ):
        self.order_form = order_form
        self.payment_form = payment_form
        self.card = card
        self.http = http
        self.calculator = calculator or TotalsCalculator()
        self.store_name = store_name
        self.state = CheckoutState.IDLE
        self.status = StatusMessage("")
        self._ready = False
        self._in_flight = False
        self.calculator.recalculate(self.order_form.lines())

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def submit_enabled(self) -> bool:
        return self._ready and not self._in_flight

    def _set_status(self, text: str, kind: str = "info") -> None:
        self.status = StatusMessage(text, kind)

    def _transition(self, state: CheckoutState) -> None:
        logger.debug("checkout %s -> %s", self.state.value, state.value)
        self.state = state

    async def initialize(self) -> bool:
        """
        Charge la config publique, fixe la devise d'affichage et prépare la carte.
        En cas d'échec: message d'erreur affiché et soumission désactivée.
        """
        try:
            config = await fetch_public_config(self.http)
            self.calculator.currency = config.currency
            self.on_order_input()
            await self.card.initialize(config)
        except StorefrontError as e:
            logger.error("Failed to initialize card payments: %s", e.message)
            self._set_status(e.message, "error")
            self._ready = False
            return False
        except Exception as e:
            logger.exception("Failed to initialize card payments")
            self._set_status(str(e) or StorefrontError.default_message, "error")
            self._ready = False
            return False
        self._ready = True
        return True

    def on_order_input(self) -> int:
        """À appeler à chaque saisie dans le formulaire de commande."""
        return self.calculator.recalculate(self.order_form.lines())

    async def submit(self) -> Optional[PaymentResult]:
        """
        Soumission explicite par l'utilisateur.
        Retour:
          - None si la soumission est ignorée (déjà en cours) ou rejetée à la validation
          - PaymentResult (success / failure) sinon
        """
        # Pas d'await entre le test et la pose du verrou: atomique sur la boucle d'événements
        if self._in_flight:
            logger.info("checkout.submit ignored: a submission is already in progress")
            return None
        self._in_flight = True
        try:
            return await self._run_submission()
        finally:
            self._in_flight = False

    def _fail(self, message: str) -> PaymentResult:
        self._set_status(message, "error")
        self._transition(CheckoutState.FAILED)
        return PaymentResult(payment_id="", status=PaymentStatus.FAILURE, message=message)

    def _reject(self, message: str) -> None:
        self._set_status(message, "error")
        self._transition(CheckoutState.IDLE)

    def _payload(self, token: str, amount: int) -> Dict[str, Any]:
        data = self.payment_form.form_data()
        payload: Dict[str, Any] = {
            "sourceId": token,
            "amount": amount,
            "currency": self.calculator.currency,
            "note": f"{self.store_name} checkout order for {data['cardholder'] or 'customer'}",
        }
        if data["email"]:
            payload["buyerEmail"] = data["email"]
        return payload

    async def _run_submission(self) -> Optional[PaymentResult]:
        self._transition(CheckoutState.VALIDATING)
        if not self.payment_form.report_validity():
            self._reject(self.payment_form.validation_message or INVALID_FORM_MESSAGE)
            return None

        # Total recalculé au moment de la soumission (jamais de valeur en cache)
        total = self.on_order_input()
        if total <= 0:
            self._reject(EMPTY_ORDER_MESSAGE)
            return None

        self._transition(CheckoutState.TOKENIZING)
        self._set_status(PROCESSING_MESSAGE, "pending")
        try:
            token = await self.card.tokenize_card()
        except StorefrontError as e:
            return self._fail(e.message)
        except Exception as e:
            logger.exception("Card tokenization raised")
            return self._fail(str(e) or StorefrontError.default_message)

        self._transition(CheckoutState.SUBMITTING)
        try:
            response = await self.http.post(PAYMENTS_PATH, json=self._payload(token, total))
        except httpx.HTTPError as e:
            logger.error("Payment request failed: %s", e)
            return self._fail(CheckoutNetworkError.default_message)

        if response.is_error:
            return self._fail(_error_from_response(response))

        try:
            data = response.json()
        except ValueError:
            return self._fail(PAYMENT_FAILED_MESSAGE)
        payment = data.get("payment") if isinstance(data, dict) else None
        payment = payment if isinstance(payment, dict) else {}
        payment_id = str(payment.get("id") or "")

        message = f"Payment successful! Confirmation ID: {payment_id}"
        self._set_status(message, "success")
        self.payment_form.reset()
        self.order_form.reset()
        self.on_order_input()
        self._transition(CheckoutState.SUCCEEDED)
        return PaymentResult(payment_id=payment_id, status=PaymentStatus.SUCCESS, message=message)

    async def close(self) -> None:
        """Détruit la carte (fin de vie de la page)."""
        self._ready = False
        await self.card.close()

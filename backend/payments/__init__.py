"""
Module 'payments' (feature-first): point d'entrée public.
Réunit validation, construction de la charge Square, client Square et erreurs.
"""

from .errors import CheckoutError, PaymentValidationError, PaymentConfigurationError, ProcessorError
from .models import PaymentRequest, ChargeRequest, Money
from .square_client import PaymentProcessor, SquarePaymentsClient
from .service import parse_payment_request, build_charge_request, create_payment, error_message_from

__all__ = [
    # errors
    "CheckoutError",
    "PaymentValidationError",
    "PaymentConfigurationError",
    "ProcessorError",
    # models
    "PaymentRequest",
    "ChargeRequest",
    "Money",
    # square
    "PaymentProcessor",
    "SquarePaymentsClient",
    # services
    "parse_payment_request",
    "build_charge_request",
    "create_payment",
    "error_message_from",
]

"""
Parcours de paiement côté client: totaux, formulaires, tokenisation carte, orchestration.
"""

from .errors import StorefrontError, PaymentConfigurationError, CardTokenizationError, CheckoutNetworkError
from .totals import OrderLine, TotalsCalculator, TotalsDisplay, compute_subtotal, format_money, parse_int_or_zero
from .forms import OrderForm, PaymentForm
from .card import PaymentClientAdapter, PublicConfig, TokenResult, fetch_public_config
from .orchestrator import CheckoutOrchestrator, CheckoutState, PaymentResult, PaymentStatus, StatusMessage

__all__ = [
    # errors
    "StorefrontError",
    "PaymentConfigurationError",
    "CardTokenizationError",
    "CheckoutNetworkError",
    # totals
    "OrderLine",
    "TotalsCalculator",
    "TotalsDisplay",
    "compute_subtotal",
    "format_money",
    "parse_int_or_zero",
    # forms
    "OrderForm",
    "PaymentForm",
    # card
    "PaymentClientAdapter",
    "PublicConfig",
    "TokenResult",
    "fetch_public_config",
    # orchestrator
    "CheckoutOrchestrator",
    "CheckoutState",
    "PaymentResult",
    "PaymentStatus",
    "StatusMessage",
]

"""
Erreurs de la feature 'payments'.
Chaque erreur porte son code HTTP; le handler enregistré dans app_setup les rend en {"error": ...}.
"""
from typing import Any, Dict, List, Optional


class CheckoutError(Exception):
    status_code = 500
    default_message = "Failed to process payment."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PaymentValidationError(CheckoutError):
    """Corps de requête invalide (400)."""
    status_code = 400
    default_message = "Invalid payment request."


class PaymentConfigurationError(CheckoutError):
    """Identifiants Square absents côté serveur (500 à la première tentative de paiement)."""
    default_message = "Square access token is not configured."


class ProcessorError(CheckoutError):
    """
    Le processeur a refusé ou échoué la charge.
    - errors: liste brute renvoyée par Square ([{category, code, detail}, ...])
    - http_status: statut HTTP de la réponse Square (None si erreur de transport)
    """

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        errors: Optional[List[Dict[str, Any]]] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.errors = list(errors or [])
        self.http_status = http_status

    @property
    def detail(self) -> Optional[str]:
        first = self.errors[0] if self.errors else None
        if isinstance(first, dict):
            return first.get("detail") or None
        return None

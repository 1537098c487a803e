"""
Erreurs côté client (parcours de paiement).
Chacune porte un message lisible, affiché tel quel dans le statut de paiement.
"""
from typing import Optional


class StorefrontError(Exception):
    default_message = "An unexpected error occurred while processing payment."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PaymentConfigurationError(StorefrontError):
    """Config publique introuvable ou incomplète (applicationId / locationId)."""
    default_message = "Unable to load payment configuration."


class CardTokenizationError(StorefrontError):
    """Carte refusée par le SDK ou échec de tokenisation."""
    default_message = "Card tokenization failed."


class CheckoutNetworkError(StorefrontError):
    """Le serveur de paiement est injoignable."""
    default_message = "Unable to reach the payment server. Please check your connection and try again."

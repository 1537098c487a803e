from fastapi import Depends, Request

from backend.config import Settings
from backend.payments.square_client import PaymentProcessor, SquarePaymentsClient


def get_settings(request: Request) -> Settings:
    """Settings figés au démarrage (posés sur app.state par create_app)."""
    return request.app.state.settings


def get_payment_processor(settings: Settings = Depends(get_settings)) -> PaymentProcessor:
    """
    Client processeur par requête (sans état partagé).
    Les tests le remplacent via app.dependency_overrides[get_payment_processor].
    """
    return SquarePaymentsClient.from_settings(settings)

"""
Modèles d'échange de la feature 'payments' (pydantic).
- PaymentRequest: corps accepté par POST /api/payments (noms camelCase côté front).
- ChargeRequest: requête envoyée au processeur, au format Square (snake_case).
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source_id: str = Field(alias="sourceId", min_length=1)
    amount: int = Field(gt=0)
    currency: Optional[str] = None
    buyer_email: Optional[str] = Field(default=None, alias="buyerEmail")
    note: Optional[str] = None


class Money(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: int
    currency: str


class ChargeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_id: str
    idempotency_key: str
    amount_money: Money
    autocomplete: bool = True
    buyer_email_address: Optional[str] = None
    note: Optional[str] = None

    def to_square_body(self) -> Dict[str, Any]:
        """Corps JSON de POST /v2/payments (les champs optionnels absents ne sont pas envoyés)."""
        return self.model_dump(exclude_none=True)

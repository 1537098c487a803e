"""
État des formulaires de commande et de paiement (équivalent des <form> de la page).
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import EmailStr, TypeAdapter, ValidationError

from .totals import OrderLine

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _is_valid_email(value: str) -> bool:
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


class OrderForm:
    """
    Champs quantité par produit; le prix unitaire (centimes) est fixé par la page (data-price).
    """

    def __init__(self, products: Iterable[Tuple[str, Any]], default_quantity: Any = "0"):
        self._prices: Dict[str, Any] = {}
        for product_id, unit_price in products:
            self._prices[str(product_id)] = unit_price
        self._default_quantity = default_quantity
        self._quantities: Dict[str, Any] = {}
        self.reset()

    @property
    def product_ids(self) -> List[str]:
        return list(self._prices)

    def set_quantity(self, product_id: str, value: Any) -> None:
        if product_id not in self._prices:
            raise KeyError(f"Produit inconnu: {product_id}")
        self._quantities[product_id] = value

    def quantity(self, product_id: str) -> Any:
        return self._quantities[product_id]

    def lines(self) -> List[OrderLine]:
        return [
            OrderLine(product_id=pid, unit_price=price, quantity=self._quantities.get(pid))
            for pid, price in self._prices.items()
        ]

    def reset(self) -> None:
        self._quantities = {pid: self._default_quantity for pid in self._prices}


class PaymentForm:
    """
    Champs acheteur: titulaire (requis) et email (optionnel, format vérifié s'il est saisi).
    report_validity() imite la validation native du navigateur.
    """

    def __init__(self, cardholder: str = "", email: str = ""):
        self.cardholder = cardholder
        self.email = email
        self.validation_message: Optional[str] = None

    def report_validity(self) -> bool:
        if not (self.cardholder or "").strip():
            self.validation_message = "Please enter the cardholder name."
            return False
        email = (self.email or "").strip()
        if email and not _is_valid_email(email):
            self.validation_message = "Please enter a valid email address."
            return False
        self.validation_message = None
        return True

    def form_data(self) -> Dict[str, str]:
        return {"cardholder": (self.cardholder or "").strip(), "email": (self.email or "").strip()}

    def reset(self) -> None:
        self.cardholder = ""
        self.email = ""
        self.validation_message = None

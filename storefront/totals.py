"""
Calcul des totaux de commande (logique pure, montants en centimes).
"""
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}

# Devises sans sous-unité (ISO 4217, exposant 0); les autres ont 2 décimales
CURRENCY_DECIMALS = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "UGX": 0,
}

_LEADING_INT =re.compile(r"^\s*([+-]?\d+)")


# module storefront.totals
def parse_int_or_zero(value: Any) -> int:
    """
    Entier en tête de saisie, à la manière d'un parseInt navigateur ("12abc" -> 12).
    - None, vide, non numérique, NaN -> 0
    - float -> tronqué
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class OrderLine:
    """Ligne de commande telle que saisie (valeurs brutes du formulaire)."""
    product_id: str
    unit_price: Any
    quantity: Any

    @property
    def unit_price_minor(self) -> int:
        return parse_int_or_zero(self.unit_price)

    @property
    def quantity_value(self) -> int:
        # Une quantité négative n'a pas de sens: comptée comme 0
        return max(0, parse_int_or_zero(self.quantity))

    @property
    def line_total(self) -> int:
        return self.quantity_value * self.unit_price_minor


def compute_subtotal(lines: Iterable[OrderLine]) -> int:
    """Σ quantité × prix unitaire, en centimes."""
    return sum(line.line_total for line in lines)


def format_money(minor_units: int, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Formate un montant en plus petite unité ("$15.00", "€3.50", "¥1,500").
    - Nombre de décimales propre à la devise (0 pour JPY, KRW...; 2 par défaut).
    - Devise sans symbole connu: code ISO en préfixe ("CHF 12.00").
    """
    code = (currency or DEFAULT_CURRENCY).upper()
    decimals = CURRENCY_DECIMALS.get(code, 2)
    amount = Decimal(int(minor_units)).scaleb(-decimals)
    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.{decimals}f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{code} {body}"


@dataclass(frozen=True)
class TotalsDisplay:
    """Instantané des trois zones d'affichage du total (remplacé d'un bloc, jamais champ par champ)."""
    subtotal: str
    order_total: str
    button_total: str


class TotalsCalculator:
    """
    Recalcule le sous-total à chaque saisie et met à jour l'affichage.
    - recalculate() est synchrone et sans autre effet que display.
    """

    def __init__(self, currency: str = DEFAULT_CURRENCY):
        self.currency = (currency or DEFAULT_CURRENCY).upper()
        zero = format_money(0, self.currency)
        self.display = TotalsDisplay(zero, zero, zero)

    def recalculate(self, lines: Iterable[OrderLine]) -> int:
        subtotal = compute_subtotal(lines)
        text = format_money(subtotal, self.currency)
        self.display = TotalsDisplay(subtotal=text, order_total=text, button_total=text)
        return subtotal

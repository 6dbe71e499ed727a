"""
Calcul de prix pur (pas de passerelle, pas de DB): montant de base -> GST -> total.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

# module eventpay.payments.pricing
GST_RATE = Decimal("0.18")

def compute_tax(base_amount: int) -> int:
    """
    GST (18 %) arrondie à l'unité monétaire la plus proche.
    - Arrondi décimal exact, demi-unité vers le haut (179.82 -> 180, 4.5 -> 5).
    """
    if base_amount < 0:
        raise ValueError("base_amount must be non-negative")
    tax = (Decimal(int(base_amount)) * GST_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(tax)

def compute_total(base_amount: int) -> Dict[str, int]:
    """Retourne {"base", "tax", "total"} avec total = base + tax."""
    base = int(base_amount)
    tax = compute_tax(base)
    return {"base": base, "tax": tax, "total": base + tax}

def to_minor_units(amount: int) -> int:
    """Montant passerelle en sous-unités (paise pour INR)."""
    return int(amount) * 100

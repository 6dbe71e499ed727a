"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le calcul GST, le client Razorpay et les cas d'usage commande/vérification.
"""

from .pricing import GST_RATE, compute_tax, compute_total, to_minor_units
from .razorpay_client import require_razorpay, create_order as create_gateway_order, expected_signature, verify_signature
from .service import create_order, verify_payment, get_breakdown, resolve_base_amount

__all__ = [
    # pricing
    "GST_RATE",
    "compute_tax",
    "compute_total",
    "to_minor_units",
    # razorpay
    "require_razorpay",
    "create_gateway_order",
    "expected_signature",
    "verify_signature",
    # services
    "create_order",
    "verify_payment",
    "get_breakdown",
    "resolve_base_amount",
]

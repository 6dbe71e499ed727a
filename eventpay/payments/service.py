"""
Cas d'usage 'payments': orchestre catalogue, calcul GST, passerelle Razorpay et réservations.

- create_order: ordre passerelle pour une formule valide (montants recalculés côté serveur).
- verify_payment: authentifie le retour passerelle (HMAC) puis crée la réservation payée.
- get_breakdown: détail base/GST/total pour affichage avant paiement.
"""
from typing import Any, Dict, Optional
import logging
import time

from fastapi.concurrency import run_in_threadpool

from eventpay import config
from eventpay.bookings import service as bookings_service
from eventpay.catalog import service as catalog_service
from eventpay.errors import InvalidPackageError, MissingFieldsError, PersistenceError, SignatureMismatchError, ValidationError
from . import pricing
from . import razorpay_client

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ("name", "number", "address")
MAX_NUMERIC_PACKAGE_DIGITS = 12

def _clean(value: Any) -> str:
    return str(value or "").strip()

async def create_order(customer: Dict[str, Any], package_id: str) -> Dict[str, Any]:
    """
    Crée un ordre Razorpay pour (client, formule).
    - ValidationError si name/number/address/package manque.
    - InvalidPackageError si la formule n'est pas au catalogue courant (aucun appel passerelle).
    - GatewayError si la passerelle échoue ou expire (pas de nouvel essai).
    Retour: {gatewayOrderId, amount, currency, base, tax, total}
    """
    fields = {k: _clean(customer.get(k)) for k in CUSTOMER_FIELDS}
    package_id = _clean(package_id)
    if not all(fields.values()) or not package_id:
        raise ValidationError()

    package = await run_in_threadpool(catalog_service.get_package, package_id)
    if package is None:
        raise InvalidPackageError()

    amounts = pricing.compute_total(package.base_price)
    amount = pricing.to_minor_units(amounts["total"])
    notes = {
        **fields,
        "package": package_id,
        "baseAmount": str(amounts["base"]),
        "gstAmount": str(amounts["tax"]),
    }
    order = await razorpay_client.create_order(
        amount=amount,
        currency=config.PAYMENT_CURRENCY,
        receipt=f"receipt_{int(time.time() * 1000)}",
        notes=notes,
    )
    logger.info("payments.service order created order_id=%s package=%s amount=%s", order.get("id"), package_id, amount)
    return {
        "gatewayOrderId": order["id"],
        "amount": order.get("amount", amount),
        "currency": order.get("currency", config.PAYMENT_CURRENCY),
        **amounts,
    }

def resolve_base_amount(package_id: str) -> Optional[int]:
    """
    Montant de base d'une formule au moment de la vérification.
    Pas de revalidation: prix du catalogue si la formule y figure encore,
    sinon identifiant numérique (les ids historiques sont les montants), sinon None.
    """
    package = catalog_service.get_package(package_id)
    if package is not None:
        return package.base_price
    # ids numériques ASCII uniquement, longueur bornée
    if package_id.isascii() and package_id.isdecimal() and len(package_id) <= MAX_NUMERIC_PACKAGE_DIGITS:
        return int(package_id)
    return None

def verify_payment(
    *,
    order_id: str,
    payment_id: str,
    signature: str,
    customer: Dict[str, Any],
    package_id: str,
) -> Dict[str, Any]:
    """
    Vérifie le retour de paiement et crée la réservation payée.
    Étapes:
      1) MissingFieldsError si un des trois champs passerelle manque.
      2) HMAC-SHA256(secret, "order|payment") comparée en temps constant; sinon
         SignatureMismatchError, avant tout accès au stockage.
      3) Montants recalculés depuis la formule transmise (voir resolve_base_amount).
      4) Insertion avec jeton unique: payment_mode=online, is_paid=True.
    Aucune déduplication sur payment_id: deux appels identiques créent deux réservations.
    PersistenceError si le stockage échoue alors que le paiement est déjà capturé:
    le log ERROR contient de quoi rapprocher manuellement.
    """
    order_id, payment_id, signature = _clean(order_id), _clean(payment_id), _clean(signature)
    if not order_id or not payment_id or not signature:
        raise MissingFieldsError()

    if not razorpay_client.verify_signature(order_id, payment_id, signature):
        logger.warning("payments.service signature mismatch order_id=%s payment_id=%s", order_id, payment_id)
        raise SignatureMismatchError()

    package_id = _clean(package_id)
    fields = {k: _clean((customer or {}).get(k)) for k in CUSTOMER_FIELDS}
    blank = [k for k, v in fields.items() if not v]
    if blank:
        # Paiement déjà capturé: on enregistre quand même, l'opérateur complète la fiche
        logger.warning(
            "payments.service incomplete customer data order_id=%s payment_id=%s missing=%s",
            order_id, payment_id, ",".join(blank),
        )
    row: Dict[str, Any] = {
        **fields,
        "package": package_id,
        "payment_mode": "online",
        "is_paid": True,
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "gst_amount": 0,
        "total_amount_paid": None,
    }
    try:
        base = resolve_base_amount(package_id)
        if base is None:
            logger.error(
                "payments.service unknown package at verification order_id=%s payment_id=%s package=%s, amounts not recorded",
                order_id, payment_id, package_id[:64],
            )
        else:
            amounts = pricing.compute_total(base)
            row["gst_amount"] = amounts["tax"]
            row["total_amount_paid"] = amounts["total"]
        booking = bookings_service.create_booking_record(row)
    except Exception as e:
        # paiement capturé sans réservation: rapprochement manuel
        logger.exception(
            "payments.service booking not persisted after verified payment, reconcile manually "
            "order_id=%s payment_id=%s package=%s name=%s number=%s",
            order_id, payment_id, package_id[:64], fields["name"], fields["number"],
        )
        if isinstance(e, PersistenceError):
            raise
        raise PersistenceError() from e
    logger.info("payments.service payment verified order_id=%s payment_id=%s token=%s", order_id, payment_id, booking.get("token"))
    return booking

def get_breakdown(package_id: str) -> Dict[str, int]:
    """Composition pure catalogue + calcul: {base, tax, total} ou InvalidPackageError."""
    package = catalog_service.get_package(_clean(package_id))
    if package is None:
        raise InvalidPackageError("Invalid package")
    return pricing.compute_total(package.base_price)

# module eventpay.payments.views
import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from eventpay.errors import MissingFieldsError, ValidationError
from eventpay.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["Payments API"])

async def _json_body(request: Request, error: Exception) -> Dict[str, Any]:
    try:
        body = await request.json()
    except Exception:
        raise error
    if not isinstance(body, dict):
        raise error
    return body

@router.post("/create-order")
async def create_order(request: Request):
    """
    Crée un ordre Razorpay pour la formule choisie.
    - Entrée JSON: {name, number, address, package}
    - Montants recalculés côté serveur (base + GST 18%), jamais lus depuis le client.
    - Erreurs: 400 champs manquants / formule invalide, 500 passerelle indisponible.
    """
    body = await _json_body(request, ValidationError())
    order = await payments_service.create_order(body, body.get("package"))
    return {
        "success": True,
        "orderId": order["gatewayOrderId"],
        "amount": order["amount"],
        "currency": order["currency"],
        "baseAmount": order["base"],
        "gstAmount": order["tax"],
        "totalAmount": order["total"],
    }

@router.post("/verify", status_code=201)
async def verify_payment(request: Request):
    """
    Retour du checkout Razorpay: vérifie la signature HMAC et crée la réservation payée.
    - Entrée JSON: {razorpay_order_id, razorpay_payment_id, razorpay_signature, name, number, address, package}
    - 201 {success, message, token, booking}
    - Erreurs: 400 données manquantes / signature invalide, 500 stockage.
    """
    body = await _json_body(request, MissingFieldsError())
    # Supabase est synchrone: vérification + insertion hors de la boucle d'événements
    booking = await run_in_threadpool(
        lambda: payments_service.verify_payment(
            order_id=body.get("razorpay_order_id"),
            payment_id=body.get("razorpay_payment_id"),
            signature=body.get("razorpay_signature"),
            customer=body,
            package_id=body.get("package"),
        )
    )
    return JSONResponse(
        {
            "success": True,
            "message": "Payment verified and booking created",
            "token": booking.get("token"),
            "booking": booking,
        },
        status_code=201,
    )

@router.get("/price-breakdown/{package}")
def price_breakdown(package: str):
    """Détail base/GST/total d'une formule du catalogue (400 si inconnue)."""
    amounts = payments_service.get_breakdown(package)
    return {
        "baseAmount": amounts["base"],
        "gstAmount": amounts["tax"],
        "totalAmount": amounts["total"],
        "breakdown": {"gst": amounts["tax"]},
    }

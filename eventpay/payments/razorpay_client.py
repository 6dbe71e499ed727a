"""
Adaptateur Razorpay: centralise les appels à l'API Orders et la vérification de signature.
"""
import hashlib
import hmac
import logging
from typing import Any, Dict

import httpx

from eventpay import config
from eventpay.errors import GatewayError

logger = logging.getLogger(__name__)

# module eventpay.payments.razorpay_client
def require_razorpay() -> None:
    """
    Vérifie que les identifiants Razorpay sont configurés.
    - Sans RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET, aucun appel passerelle n'est tenté.
    """
    if not config.RAZORPAY_KEY_ID or not config.RAZORPAY_KEY_SECRET:
        raise GatewayError()

def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.RAZORPAY_API_BASE,
        auth=(config.RAZORPAY_KEY_ID, config.RAZORPAY_KEY_SECRET),
        timeout=config.GATEWAY_TIMEOUT_SECONDS,
    )

async def create_order(
    *,
    amount: int,
    currency: str,
    receipt: str,
    notes: Dict[str, str],
) -> Dict[str, Any]:
    """
    Crée un ordre Razorpay (POST /orders).
    - amount: montant en sous-unités (paise)
    - notes: métadonnées opaques (client, formule, montants) pour l'audit
    Retour: dict ordre (ex: {"id": "order_...", "amount": 117900, "currency": "INR", ...})
    Erreurs: GatewayError sur timeout, erreur réseau, statut non 2xx ou réponse sans id.
    Aucun nouvel essai: le client doit relancer la création.
    """
    require_razorpay()
    payload = {"amount": amount, "currency": currency, "receipt": receipt, "notes": notes}
    try:
        async with _http_client() as client:
            resp = await client.post("/orders", json=payload)
    except httpx.TimeoutException:
        logger.error("payments.razorpay_client.create_order timeout receipt=%s", receipt)
        raise GatewayError()
    except httpx.HTTPError:
        logger.exception("payments.razorpay_client.create_order failed receipt=%s", receipt)
        raise GatewayError()

    if not 200 <= resp.status_code < 300:
        logger.error(
            "payments.razorpay_client.create_order rejected status=%s body=%s receipt=%s",
            resp.status_code, resp.text[:500], receipt,
        )
        raise GatewayError()
    try:
        order = resp.json()
    except ValueError:
        order = None
    if not isinstance(order, dict) or not order.get("id"):
        logger.error("payments.razorpay_client.create_order invalid body receipt=%s", receipt)
        raise GatewayError()
    return order

def expected_signature(order_id: str, payment_id: str) -> str:
    """HMAC-SHA256 hexadécimal de "<order_id>|<payment_id>" avec RAZORPAY_KEY_SECRET."""
    body = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(config.RAZORPAY_KEY_SECRET.encode("utf-8"), body, hashlib.sha256).hexdigest()

def verify_signature(order_id: str, payment_id: str, signature: str) -> bool:
    """
    Compare la signature reçue à la signature attendue (temps constant).
    - Sans secret configuré, aucune signature n'est acceptée.
    """
    if not config.RAZORPAY_KEY_SECRET:
        logger.error("payments.razorpay_client.verify_signature RAZORPAY_KEY_SECRET missing")
        return False
    expected = expected_signature(order_id, payment_id).encode("utf-8")
    return hmac.compare_digest(expected, str(signature or "").encode("utf-8"))

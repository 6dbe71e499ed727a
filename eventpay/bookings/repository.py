"""
Accès aux données pour la feature 'bookings' (table bookings).

Les écritures passent par le client service-role. L'insertion distingue le conflit
d'unicité sur le jeton (DuplicateTokenError, code 23505) des autres échecs
(PersistenceError); les lectures admin restent tolérantes (loggent et renvoient vide).
"""
from typing import Any, Dict, List, Optional
import logging

from postgrest.exceptions import APIError

import eventpay.infra.supabase_client as supabase_client
from eventpay.errors import DuplicateTokenError, PersistenceError

logger = logging.getLogger(__name__)

BOOKING_COLUMNS = (
    "id, token, name, number, address, package, payment_mode, is_paid, "
    "screenshot_url, screenshot_path, razorpay_order_id, razorpay_payment_id, "
    "gst_amount, total_amount_paid, created_at"
)

def _api_error_code(e: APIError) -> Optional[str]:
    code = getattr(e, "code", None)
    if not code and e.args and isinstance(e.args[0], dict):
        code = e.args[0].get("code")
    return code

# module eventpay.bookings.repository
def token_exists(token: str) -> bool:
    """Vrai si une réservation porte déjà ce jeton. PersistenceError si la lecture échoue."""
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("bookings")
            .select("id")
            .eq("token", token)
            .limit(1)
            .execute()
        )
        return bool(res.data)
    except Exception:
        logger.exception("bookings.repository.token_exists failed token=%s", token)
        raise PersistenceError()

def insert_booking(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insère une réservation et retourne la ligne créée.
    - DuplicateTokenError si la contrainte UNIQUE(token) est violée (23505).
    - PersistenceError pour tout autre échec.
    """
    try:
        res = supabase_client.get_service_supabase().table("bookings").insert(row).execute()
    except APIError as e:
        if _api_error_code(e) == "23505":
            raise DuplicateTokenError(row.get("token"))
        logger.exception("bookings.repository.insert_booking failed token=%s", row.get("token"))
        raise PersistenceError()
    except Exception:
        logger.exception("bookings.repository.insert_booking failed token=%s", row.get("token"))
        raise PersistenceError()
    rows = res.data or []
    if isinstance(rows, list) and rows:
        return rows[0]
    if isinstance(rows, dict):
        return rows
    return dict(row)

def list_bookings() -> List[dict]:
    """Toutes les réservations, les plus récentes d'abord ([] en cas d'erreur)."""
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("bookings")
            .select(BOOKING_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("bookings.repository.list_bookings failed")
        return []

def get_booking(booking_id: str) -> Optional[dict]:
    if not booking_id:
        return None
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("bookings")
            .select(BOOKING_COLUMNS)
            .eq("id", booking_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("bookings.repository.get_booking failed id=%s", booking_id)
        return None

def set_paid(booking_id: str, is_paid: bool) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("bookings")
            .update({"is_paid": is_paid})
            .eq("id", booking_id)
            .execute()
        )
        rows = res.data or []
        return rows[0] if isinstance(rows, list) and rows else None
    except Exception:
        logger.exception("bookings.repository.set_paid failed id=%s", booking_id)
        return None

def delete_booking(booking_id: str) -> bool:
    try:
        supabase_client.get_service_supabase().table("bookings").delete().eq("id", booking_id).execute()
        return True
    except Exception:
        logger.exception("bookings.repository.delete_booking failed id=%s", booking_id)
        return False

def list_screenshot_paths(package: Optional[str] = None) -> List[str]:
    """Chemins Storage des captures attachées (toutes ou pour une formule)."""
    try:
        query = (
            supabase_client.get_service_supabase()
            .table("bookings")
            .select("screenshot_path")
            .not_.is_("screenshot_path", "null")
        )
        if package is not None:
            query = query.eq("package", package)
        res = query.execute()
        return [r["screenshot_path"] for r in (res.data or []) if r.get("screenshot_path")]
    except Exception:
        logger.exception("bookings.repository.list_screenshot_paths failed package=%s", package)
        return []

def delete_bookings(package: Optional[str] = None) -> int:
    """
    Supprime toutes les réservations (ou celles d'une formule) et retourne le nombre supprimé.
    PersistenceError si la suppression échoue.
    """
    try:
        # PostgREST exige un filtre sur DELETE: token est toujours renseigné
        query = supabase_client.get_service_supabase().table("bookings").delete().neq("token", "")
        if package is not None:
            query = query.eq("package", package)
        res = query.execute()
        return len(res.data or [])
    except Exception:
        logger.exception("bookings.repository.delete_bookings failed package=%s", package)
        raise PersistenceError("Failed to delete bookings")

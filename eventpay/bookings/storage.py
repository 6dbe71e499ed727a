"""
Libération des captures de paiement dans Supabase Storage (best-effort).
"""
import logging
import eventpay.infra.supabase_client as supabase_client
from eventpay.config import SCREENSHOT_BUCKET

logger = logging.getLogger(__name__)

def release_screenshot(path: str) -> bool:
    """
    Supprime l'objet du bucket SCREENSHOT_BUCKET.
    - Un échec est loggé et n'interrompt jamais la suppression de la réservation.
    """
    if not path:
        return False
    try:
        supabase_client.get_service_supabase().storage.from_(SCREENSHOT_BUCKET).remove([path])
        return True
    except Exception:
        logger.exception("bookings.storage.release_screenshot failed path=%s", path)
        return False

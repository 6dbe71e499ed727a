"""
Accès aux données du catalogue (table site_config: key/value JSON).
"""
from typing import Any, Optional
import logging
import eventpay.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module eventpay.catalog.repository
def get_config_value(key: str) -> Optional[Any]:
    """
    Lit la valeur d'une clé de configuration.
    - Retourne None si la clé est absente ou en cas d'erreur (loggée).
    """
    try:
        res = (
            supabase_client.get_supabase()
            .table("site_config")
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        if isinstance(rows, list) and rows:
            return rows[0].get("value")
        return None
    except Exception:
        logger.exception("catalog.repository.get_config_value failed key=%s", key)
        return None

def upsert_config_value(key: str, value: Any) -> Optional[dict]:
    """
    Écrase (ou crée) la valeur d'une clé de configuration via le client service-role.
    - Retourne la ligne écrite, ou None en cas d'erreur.
    """
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("site_config")
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        rows = res.data or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return {"key": key, "value": value}
    except Exception:
        logger.exception("catalog.repository.upsert_config_value failed key=%s", key)
        return None

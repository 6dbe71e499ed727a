"""
Clients Supabase partagés (créés au premier usage, réutilisés ensuite).
- 'anon': lectures publiques (catalogue site_config).
- 'service': service-role, bypass RLS; réservations, écriture du catalogue, Storage.
"""
from typing import Dict
import logging

from supabase import create_client, Client

from eventpay import config

logger = logging.getLogger(__name__)

_clients: Dict[str, Client] = {}

def _client(role: str, key: str) -> Client:
    if role not in _clients:
        if not config.SUPABASE_URL or not key:
            raise RuntimeError(f"Supabase '{role}' client not configured (SUPABASE_URL / key missing)")
        logger.info("infra.supabase_client creating %s client url=%s", role, config.SUPABASE_URL)
        _clients[role] = create_client(config.SUPABASE_URL, key)
    return _clients[role]

def get_supabase() -> Client:
    return _client("anon", config.SUPABASE_ANON)

def get_service_supabase() -> Client:
    return _client("service", config.SUPABASE_SERVICE_KEY)

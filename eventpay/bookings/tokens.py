"""
Jetons de réservation: référence courte (6 caractères [A-Z0-9]) affichée au client.

Ce n'est pas un secret: le jeton ne doit jamais servir à autoriser un accès.
L'unicité repose sur la contrainte UNIQUE de bookings.token; une insertion en
conflit relance un tirage au lieu de remonter une erreur.
"""
import logging
import secrets
import string
from typing import Any, Callable, Dict

from eventpay.errors import DuplicateTokenError, PersistenceError

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 6
# Conflits d'insertion tolérés avant d'abandonner (36^6 ~ 2.18e9 combinaisons)
MAX_TOKEN_ATTEMPTS = 20

def generate_token() -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))

def generate_unique_token(exists: Callable[[str], bool]) -> str:
    """
    Tire des jetons jusqu'à en trouver un absent du stockage (exists(token) == False).
    Pas de borne: la vérification est rapide et l'espace grand devant le volume attendu.
    Non atomique avec l'insertion: voir create_with_unique_token.
    """
    while True:
        token = generate_token()
        if not exists(token):
            return token

def create_with_unique_token(
    exists: Callable[[str], bool],
    insert: Callable[[str], Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Tire un jeton libre puis tente l'insertion; sur DuplicateTokenError (course avec
    une autre requête), recommence avec un nouveau jeton.
    - insert(token) doit lever DuplicateTokenError sur conflit d'unicité.
    - PersistenceError après MAX_TOKEN_ATTEMPTS conflits consécutifs.
    """
    for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
        token = generate_unique_token(exists)
        try:
            return insert(token)
        except DuplicateTokenError:
            logger.warning("bookings.tokens duplicate token on insert attempt=%s, retrying", attempt)
    raise PersistenceError()

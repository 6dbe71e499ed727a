from typing import Dict, Any
import jwt

from eventpay.config import SUPABASE_JWT_SECRET
from .repository import get_user_from_access_token as _repo_get_user_from_token

def determine_role(metadata: Dict[str, Any] | None) -> str:
    role_lower = str((metadata or {}).get("role", "")).lower()
    if role_lower == "admin":
        return "admin"
    return "user"

def _decode_locally(access_token: str) -> Dict[str, Any]:
    """Validation locale HS256 (SUPABASE_JWT_SECRET) sans aller-retour réseau."""
    claims = jwt.decode(
        access_token,
        SUPABASE_JWT_SECRET,
        algorithms=["HS256"],
        options={"verify_aud": False},
    )
    return {
        "id": claims.get("sub"),
        "email": claims.get("email"),
        "user_metadata": claims.get("user_metadata") or {},
    }

def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """Normalise l'utilisateur porteur du jeton:
    - Si SUPABASE_JWT_SECRET est défini: décodage local (PyJWT), sinon supabase.auth.get_user
    - Retourne {id, email, metadata, role}
    - Lève jwt.PyJWTError / Exception si le jeton est invalide (traduit en 401 par la sécurité)
    """
    raw = _decode_locally(access_token) if SUPABASE_JWT_SECRET else _repo_get_user_from_token(access_token)
    metadata = raw.get("user_metadata") or {}
    return {
        "id": raw.get("id"),
        "email": raw.get("email"),
        "metadata": metadata,
        "role": determine_role(metadata),
    }

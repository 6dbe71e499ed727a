from fastapi import Request, HTTPException, Depends
from typing import Dict, Any

def get_current_user(request: Request) -> Dict[str, Any]:
    # Jeton d'accès Supabase transmis en Bearer par le back-office
    token = None
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()

    if not token:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    try:
        from eventpay.auth.service import get_user_from_token as _svc_get_user_from_token
        user = _svc_get_user_from_token(token)
        if not user.get("id"):
            raise HTTPException(status_code=401, detail="Not authorized, token failed")
        return user
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")

def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Not authorized as admin")
    return user

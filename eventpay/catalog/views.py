"""Endpoints du catalogue des formules (site config).
- GET public: catalogue courant (ou catalogue par défaut si la configuration est absente).
- POST admin: remplace le catalogue; c'est la seule source d'entrée du catalogue.
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from eventpay.catalog import service as catalog_service
from eventpay.errors import ValidationError
from eventpay.utils.security import require_admin

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/config", tags=["Site config"])

@router.get("/event-packages")
def get_event_packages() -> Dict[str, Any]:
    packages = catalog_service.list_valid_packages()
    return {"packages": [p.to_public() for p in packages]}

@router.post("/event-packages")
async def update_event_packages(request: Request, user: dict = Depends(require_admin)):
    """Remplace le catalogue (admin).
    - Entrée JSON: {"packages": [{"id": "999", "basePrice": 999}, ...]}
    - 400 si le corps est invalide, 500 si l'écriture échoue.
    """
    try:
        body = await request.json()
    except Exception:
        raise ValidationError("Invalid JSON body")
    raw = (body or {}).get("packages") if isinstance(body, dict) else None
    packages = await run_in_threadpool(catalog_service.update_packages, raw)
    logger.info("catalog.views event_packages updated by admin=%s", user.get("id"))
    return JSONResponse({"packages": [p.to_public() for p in packages]})

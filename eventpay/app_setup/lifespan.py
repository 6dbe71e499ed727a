"""
Lifespan FastAPI: vérifications de démarrage.
- Signale (sans bloquer) les secrets manquants: sans Razorpay les paiements échouent en 500,
  sans clé service Supabase aucune réservation ne peut être écrite.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from eventpay import config

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    if not config.RAZORPAY_KEY_ID or not config.RAZORPAY_KEY_SECRET:
        logger.warning("Razorpay disabled: RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET missing")
    if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_KEY:
        logger.warning("Supabase writes disabled: SUPABASE_URL / SUPABASE_SERVICE_KEY missing")
    app.state.payments_enabled = bool(config.RAZORPAY_KEY_ID and config.RAZORPAY_KEY_SECRET)
    logger.info("eventpay started currency=%s payments_enabled=%s", config.PAYMENT_CURRENCY, app.state.payments_enabled)

    yield

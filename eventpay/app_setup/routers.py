"""
Registre central des routers (tous sous /api).
- Paiements: création d'ordre, vérification, détail de prix
- Réservations: création en espèces (public) et back-office (admin)
- Site config: catalogue des formules
- Health
"""
from fastapi import FastAPI
from eventpay.payments import views as payments_views
from eventpay.bookings import views as bookings_views
from eventpay.catalog import views as catalog_views
from eventpay.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(bookings_views.router)
    app.include_router(catalog_views.router)
    app.include_router(health_router)

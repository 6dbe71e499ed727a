# module eventpay.bookings.views

"""Endpoints des réservations.
- POST "": réservation publique en espèces (jeton unique, non payée).
- Routes admin (require_admin): liste, détail, bascule payé, suppressions.
Les erreurs métier (400/404/500) sont traduites par les handlers de eventpay.app_setup.exceptions.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import logging

from eventpay.bookings import service as bookings_service
from eventpay.errors import ValidationError
from eventpay.utils.security import require_admin

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bookings", tags=["Bookings API"])


@router.post("", status_code=201)
async def create_booking(request: Request):
    """Crée une réservation en espèces.
    - Entrée JSON: {name, number, address, package, paymentMode: "cash", screenshotUrl?, screenshotPath?}
    - 201 avec la réservation créée (jeton inclus).
    """
    try:
        body = await request.json()
    except Exception:
        raise ValidationError("Please fill in all required fields")
    if not isinstance(body, dict):
        raise ValidationError("Please fill in all required fields")
    # Lectures/écritures Supabase synchrones: hors de la boucle d'événements
    booking = await run_in_threadpool(bookings_service.create_cash_booking, body)
    return JSONResponse(booking, status_code=201)


@router.get("")
def list_bookings(user: dict = Depends(require_admin)):
    return bookings_service.list_bookings()


@router.delete("/all")
def delete_all_bookings(user: dict = Depends(require_admin)):
    deleted = bookings_service.delete_bookings()
    logger.info("bookings.views delete_all by admin=%s deleted=%s", user.get("id"), deleted)
    return {"message": f"{deleted} bookings deleted", "deleted": deleted}


@router.delete("/by-package/{package}")
def delete_bookings_by_package(package: str, user: dict = Depends(require_admin)):
    deleted = bookings_service.delete_bookings(package)
    logger.info("bookings.views delete_by_package=%s by admin=%s deleted=%s", package, user.get("id"), deleted)
    return {"message": f"{deleted} bookings with package {package} deleted", "deleted": deleted}


@router.get("/{booking_id}")
def get_booking(booking_id: str, user: dict = Depends(require_admin)):
    return bookings_service.get_booking(booking_id)


@router.patch("/{booking_id}/toggle-paid")
def toggle_paid(booking_id: str, user: dict = Depends(require_admin)):
    """Bascule is_paid (pointage manuel des réservations en espèces)."""
    return bookings_service.toggle_paid(booking_id)


@router.delete("/{booking_id}")
def delete_booking(booking_id: str, user: dict = Depends(require_admin)):
    """Supprime la réservation et libère sa capture (échec de libération non bloquant)."""
    bookings_service.delete_booking(booking_id)
    return {"message": "Booking removed"}

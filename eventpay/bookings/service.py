"""Couche service des réservations.
Rôles:
- Créer une réservation avec un jeton unique (insertion + nouveau tirage sur conflit).
- Réservation publique en espèces (non payée jusqu'au pointage admin).
- Actions admin: consultation, bascule payé/non payé, suppressions avec libération des captures.
"""
from typing import Any, Dict, List, Optional
import logging

from eventpay.bookings import repository, storage, tokens
from eventpay.catalog import service as catalog_service
from eventpay.errors import InvalidPackageError, NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ("name", "number", "address")

def _clean(value: Any) -> str:
    return str(value or "").strip()

def create_booking_record(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Persiste row avec un jeton unique et retourne la ligne créée.
    - Jeton libre vérifié puis insertion; un conflit d'unicité relance un tirage.
    - PersistenceError si le stockage échoue.
    """
    def _insert(token: str) -> Dict[str, Any]:
        return repository.insert_booking({**row, "token": token})

    return tokens.create_with_unique_token(repository.token_exists, _insert)

def create_cash_booking(data: Dict[str, Any]) -> Dict[str, Any]:
    """Réservation publique réglée sur place.
    - name, number, address, package, paymentMode requis (400 sinon).
    - paymentMode doit valoir 'cash': les réservations en ligne naissent de la vérification de paiement.
    - La formule doit appartenir au catalogue courant.
    - Capture facultative (screenshotUrl/screenshotPath) déjà déposée dans Supabase Storage.
    """
    fields = {k: _clean(data.get(k)) for k in CUSTOMER_FIELDS}
    package_id = _clean(data.get("package"))
    payment_mode = _clean(data.get("paymentMode")).lower()
    if not all(fields.values()) or not package_id or not payment_mode:
        raise ValidationError("Please fill in all required fields")
    if payment_mode != "cash":
        raise ValidationError("Online bookings are created through payment verification")
    if not catalog_service.is_valid_package(package_id):
        raise InvalidPackageError()

    row = {
        **fields,
        "package": package_id,
        "payment_mode": "cash",
        "is_paid": False,
        "screenshot_url": _clean(data.get("screenshotUrl")) or None,
        "screenshot_path": _clean(data.get("screenshotPath")) or None,
    }
    booking = create_booking_record(row)
    logger.info("bookings.service cash booking created token=%s package=%s", booking.get("token"), package_id)
    return booking

def list_bookings() -> List[dict]:
    return repository.list_bookings()

def get_booking(booking_id: str) -> dict:
    booking = repository.get_booking(booking_id)
    if not booking:
        raise NotFoundError()
    return booking

def toggle_paid(booking_id: str) -> dict:
    booking = get_booking(booking_id)
    updated = repository.set_paid(booking_id, not bool(booking.get("is_paid")))
    if not updated:
        raise PersistenceError("Failed to update booking")
    return updated

def delete_booking(booking_id: str) -> None:
    """Supprime une réservation; la capture éventuelle est libérée avant (best-effort)."""
    booking = get_booking(booking_id)
    if booking.get("screenshot_path"):
        storage.release_screenshot(booking["screenshot_path"])
    if not repository.delete_booking(booking_id):
        raise PersistenceError("Failed to delete booking")

def delete_bookings(package: Optional[str] = None) -> int:
    """Supprime toutes les réservations (ou celles d'une formule) après libération des captures."""
    for path in repository.list_screenshot_paths(package):
        storage.release_screenshot(path)
    deleted = repository.delete_bookings(package)
    logger.info("bookings.service deleted=%s package=%s", deleted, package)
    return deleted

"""
Catalogue des formules: accesseur typé au-dessus de site_config['event_packages'].

Politique de repli explicite: si l'enregistrement est absent, illisible ou mal formé,
le catalogue par défaut (DEFAULT_EVENT_PACKAGES) est renvoyé. Aucune mise en cache:
chaque appel relit le stockage.
"""
from typing import Any, List, Optional
import logging

from pydantic import ValidationError as PydanticValidationError

from eventpay.catalog import repository
from eventpay.catalog.models import DEFAULT_EVENT_PACKAGES, EVENT_PACKAGES_KEY, PackageCatalogEntry
from eventpay.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

def _parse_entries(value: Any) -> List[PackageCatalogEntry]:
    entries: List[PackageCatalogEntry] = []
    for raw in value:
        try:
            entries.append(PackageCatalogEntry.model_validate(raw))
        except PydanticValidationError:
            logger.warning("catalog.service ignoring malformed entry=%r", raw)
    return entries

def list_valid_packages() -> List[PackageCatalogEntry]:
    """
    Retourne le catalogue courant.
    - Ne lève jamais: toute erreur de lecture est loggée (repository) et dégrade vers le défaut.
    - Une valeur qui n'est pas une liste, ou sans aucune entrée valide, dégrade aussi vers le défaut.
    """
    value = repository.get_config_value(EVENT_PACKAGES_KEY)
    if not isinstance(value, list):
        if value is not None:
            logger.warning("catalog.service %s is not a list (type=%s), using defaults", EVENT_PACKAGES_KEY, type(value).__name__)
        return list(DEFAULT_EVENT_PACKAGES)
    entries = _parse_entries(value)
    if not entries:
        logger.warning("catalog.service %s has no valid entry, using defaults", EVENT_PACKAGES_KEY)
        return list(DEFAULT_EVENT_PACKAGES)
    return entries

def get_package(package_id: str) -> Optional[PackageCatalogEntry]:
    package_id = str(package_id or "").strip()
    return next((p for p in list_valid_packages() if p.id == package_id), None)

def is_valid_package(package_id: str) -> bool:
    return get_package(package_id) is not None

def update_packages(raw_entries: Any) -> List[PackageCatalogEntry]:
    """
    Remplace le catalogue (action admin).
    - raw_entries: [{"id": "...", "basePrice": <int>}, ...], non vide, ids uniques.
    - ValidationError si une entrée est invalide; PersistenceError si l'écriture échoue.
    """
    if not isinstance(raw_entries, list) or not raw_entries:
        raise ValidationError("Packages must be a non-empty list")
    try:
        entries = [PackageCatalogEntry.model_validate(raw) for raw in raw_entries]
    except PydanticValidationError:
        raise ValidationError("Invalid package entry")
    ids = [e.id for e in entries]
    if len(ids) != len(set(ids)):
        raise ValidationError("Duplicate package id")

    written = repository.upsert_config_value(EVENT_PACKAGES_KEY, [e.to_public() for e in entries])
    if written is None:
        raise PersistenceError("Failed to update event packages")
    logger.info("catalog.service event_packages updated ids=%s", ids)
    return entries

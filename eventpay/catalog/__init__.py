"""
Module 'catalog': catalogue des formules réservables (site_config['event_packages']).
"""

from .models import PackageCatalogEntry, DEFAULT_EVENT_PACKAGES, EVENT_PACKAGES_KEY
from .service import list_valid_packages, is_valid_package, get_package, update_packages

__all__ = [
    "PackageCatalogEntry",
    "DEFAULT_EVENT_PACKAGES",
    "EVENT_PACKAGES_KEY",
    "list_valid_packages",
    "is_valid_package",
    "get_package",
    "update_packages",
]

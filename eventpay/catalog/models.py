"""
Modèle du catalogue des formules (packages) et catalogue par défaut.
"""
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Clé de l'enregistrement site_config contenant le catalogue
EVENT_PACKAGES_KEY = "event_packages"


class PackageCatalogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    base_price: int = Field(alias="basePrice", ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        # Les anciens enregistrements stockent parfois l'id sous forme numérique (999)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v))
        if isinstance(v, str):
            return v.strip()
        return v

    def to_public(self) -> Dict[str, Any]:
        return {"id": self.id, "basePrice": self.base_price}


# Catalogue de repli (constante de déploiement) utilisé si site_config est vide,
# illisible ou mal formé.
DEFAULT_EVENT_PACKAGES: List[PackageCatalogEntry] = [
    PackageCatalogEntry(id="10000", base_price=10000),
    PackageCatalogEntry(id="999", base_price=999),
    PackageCatalogEntry(id="500", base_price=500),
]

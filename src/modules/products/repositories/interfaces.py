"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups the catalog needs:
slug lookup with the category expanded, and whole-record replacement.

Store faults surface as ``django.db.DatabaseError`` subclasses.
Malformed ids are treated as "no match" (``None``).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def find_by_slug_expanded(self, slug: str) -> Optional[Product]:
        """Retrieve a product by slug, photo bytes excluded, category loaded."""

    @abstractmethod
    def replace_by_id(self, id: str, fields: Dict[str, Any]) -> Optional[Product]:
        """Overwrite the given fields on a product and return the stored result.

        Returns ``None`` if no product has this id.
        """

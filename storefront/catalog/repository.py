"""
Accès aux données (Supabase) du catalogue: catégories, métadonnées, produits, images, bannières.
Lecture seule. Les exceptions sont journalisées et transformées en valeurs neutres (None, [], {}),
sauf get_products_map: un panier ne doit pas être tarifé sur un catalogue indisponible.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging

from supabase import Client

from storefront.errors import PersistenceError

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = "id, label, price, description, category_id, product_images(id, url)"


def _normalize_product(row: Dict[str, Any]) -> Dict[str, Any]:
    images = sorted(row.get("product_images") or [], key=lambda img: img.get("id") or 0)
    return {
        "id": row.get("id"),
        "label": row.get("label"),
        "price": row.get("price"),
        "description": row.get("description"),
        "categoryId": row.get("category_id"),
        "images": images,
    }


class CatalogRepository:
    def __init__(self, client: Client):
        self.client = client

    def get_category_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table("categories")
                .select("id, name, slug")
                .eq("slug", slug)
                .limit(1)
                .execute()
            )
            rows = res.data or []
            return rows[0] if rows else None
        except Exception:
            logger.exception("catalog.repository.get_category_by_slug failed slug=%s", slug)
            return None

    def get_category_metadata(self, category_id: int) -> List[Dict[str, Any]]:
        """
        Métadonnées filtrables d'une catégorie avec leurs valeurs.
        Retour: [{"id", "name", "values": [{"id", "label"}]}]
        """
        try:
            res = (
                self.client.table("category_metadata")
                .select("id, name, metadata_values(id, label)")
                .eq("category_id", category_id)
                .execute()
            )
        except Exception:
            logger.exception("catalog.repository.get_category_metadata failed category_id=%s", category_id)
            return []
        return [
            {"id": m.get("id"), "name": m.get("name"), "values": m.get("metadata_values") or []}
            for m in (res.data or [])
        ]

    def get_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table("products")
                .select(PRODUCT_FIELDS)
                .eq("id", product_id)
                .limit(1)
                .execute()
            )
            rows = res.data or []
            return _normalize_product(rows[0]) if rows else None
        except Exception:
            logger.exception("catalog.repository.get_product failed id=%s", product_id)
            return None

    def get_products_map(self, ids: Iterable[int]) -> Dict[int, Dict[str, Any]]:
        """
        Charge plusieurs produits en une requête et retourne {id: produit}.
        Les ids introuvables sont simplement absents du dict.
        PersistenceError si la lecture échoue (à distinguer d'un produit inconnu).
        """
        wanted = sorted({int(i) for i in ids})
        if not wanted:
            return {}
        try:
            res = (
                self.client.table("products")
                .select(PRODUCT_FIELDS)
                .in_("id", wanted)
                .execute()
            )
        except Exception as e:
            logger.exception("catalog.repository.get_products_map failed ids=%s", wanted)
            raise PersistenceError() from e
        return {int(row["id"]): _normalize_product(row) for row in (res.data or []) if row.get("id") is not None}

    def list_products(self, category_id: Optional[int] = None, limit: int = 50) -> List[Dict[str, Any]]:
        try:
            query = self.client.table("products").select(PRODUCT_FIELDS)
            if category_id is not None:
                query = query.eq("category_id", category_id)
            res = query.order("id").limit(limit).execute()
        except Exception:
            logger.exception("catalog.repository.list_products failed category_id=%s", category_id)
            return []
        return [_normalize_product(row) for row in (res.data or [])]

    def list_banners(self) -> List[Dict[str, Any]]:
        try:
            res = self.client.table("banners").select("img, link").execute()
            return res.data or []
        except Exception:
            logger.exception("catalog.repository.list_banners failed")
            return []

"""Cas d'usage 'catalog': mise en forme des données du catalogue pour l'API."""
from typing import Any, Dict, List, Optional

from storefront.catalog.repository import CatalogRepository
from storefront.errors import NotFoundError
from storefront.utils.images import BANNERS_MEDIA, PRODUCTS_MEDIA, first_image_path, get_absolute_image_url


def _image_or_none(product: Dict[str, Any]) -> Optional[str]:
    path = first_image_path(product.get("images"))
    return get_absolute_image_url(path) if path else None


class CatalogService:
    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def list_banners(self) -> List[Dict[str, Any]]:
        return [
            {"img": f"{BANNERS_MEDIA}/{b.get('img')}", "link": b.get("link")}
            for b in self.repository.list_banners()
        ]

    def get_category_with_metadata(self, slug: str) -> Dict[str, Any]:
        category = self.repository.get_category_by_slug(slug)
        if not category:
            raise NotFoundError("Category not found")
        metadata = self.repository.get_category_metadata(category["id"])
        return {"category": category, "metadata": metadata}

    def mount_cart(self, ids: List[int]) -> List[Dict[str, Any]]:
        """
        Hydrate un panier côté client: {id, label, price, image} par id connu.
        - Les ids inconnus sont ignorés, l'ordre de la requête est conservé.
        """
        products = self.repository.get_products_map(ids)
        mounted: List[Dict[str, Any]] = []
        for product_id in ids:
            product = products.get(product_id)
            if not product:
                continue
            mounted.append({
                "id": product["id"],
                "label": product["label"],
                "price": product["price"],
                "image": _image_or_none(product),
            })
        return mounted

    def list_products(self, category_slug: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        category_id = None
        if category_slug:
            category = self.repository.get_category_by_slug(category_slug)
            if not category:
                raise NotFoundError("Category not found")
            category_id = category["id"]
        return [
            {"id": p["id"], "label": p["label"], "price": p["price"], "image": _image_or_none(p)}
            for p in self.repository.list_products(category_id=category_id, limit=limit)
        ]

    def get_product(self, product_id: int) -> Dict[str, Any]:
        product = self.repository.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return {
            **{k: v for k, v in product.items() if k != "images"},
            "images": [
                get_absolute_image_url(f"{PRODUCTS_MEDIA}/{img['url']}")
                for img in product.get("images") or []
                if img.get("url")
            ],
        }

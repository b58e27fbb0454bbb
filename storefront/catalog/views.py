from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.app_setup.dependencies import get_catalog_service
from storefront.catalog.service import CatalogService

router = APIRouter(prefix="/api/v1", tags=["Catalog API"])


@router.get("/banners")
def list_banners(catalog: CatalogService = Depends(get_catalog_service)):
    return {"error": None, "banners": catalog.list_banners()}


@router.get("/categories/{slug}/metadata")
def get_category_with_metadata(slug: str, catalog: CatalogService = Depends(get_catalog_service)):
    """Catégorie + filtres (métadonnées et valeurs). 404 si le slug est inconnu."""
    data = catalog.get_category_with_metadata(slug)
    return {"error": None, **data}


@router.get("/products")
def list_products(
    category: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return {"error": None, "products": catalog.list_products(category_slug=category, limit=limit)}


@router.get("/products/{product_id}")
def get_product(product_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    return {"error": None, "product": catalog.get_product(product_id)}

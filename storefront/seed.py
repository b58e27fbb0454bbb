"""
Peuplement du catalogue de démonstration.

Usage:
    python -m storefront.seed

Idempotent: ne fait rien si la catégorie 'shirts' existe déjà.
"""
import logging

from supabase import Client

from storefront.infra.supabase_client import get_service_supabase

logger = logging.getLogger("storefront.seed")

CATEGORY = {"slug": "shirts", "name": "Shirts"}
METADATA = {"id": "minimalist", "name": "Minimalist"}
METADATA_VALUES = [
    {"id": "night", "label": "Night"},
    {"id": "beach", "label": "Beach"},
    {"id": "mountain", "label": "Mountain"},
    {"id": "tree", "label": "Tree"},
]
BANNERS = [
    {"img": "banner_promo_1.jpg", "link": "/categories/shirts"},
    {"img": "banner_promo_2.jpg", "link": "/categories/test"},
]
# (label, prix, valeur de métadonnée)
PRODUCTS = [
    ("Shirt 1", "89.90", "night"),
    ("Shirt 2", "94.50", "beach"),
    ("Shirt 3", "79.99", "mountain"),
    ("Shirt 4", "69.90", "tree"),
]


def _insert(client: Client, table: str, rows):
    res = client.table(table).insert(rows).execute()
    return res.data or []


def seed(client: Client) -> bool:
    """Insère le catalogue; retourne False si déjà présent."""
    existing = client.table("categories").select("id, name").eq("slug", CATEGORY["slug"]).limit(1).execute()
    if existing.data:
        logger.info("Database already seeded (category %s found), skipping", existing.data[0].get("name"))
        return False

    category = _insert(client, "categories", CATEGORY)[0]
    _insert(client, "category_metadata", {**METADATA, "category_id": category["id"]})
    _insert(client, "banners", BANNERS)
    _insert(client, "metadata_values", [{**v, "category_metadata_id": METADATA["id"]} for v in METADATA_VALUES])

    products = _insert(client, "products", [
        {"label": label, "price": price, "description": f"Test {label.lower()}", "category_id": category["id"]}
        for label, price, _ in PRODUCTS
    ])
    _insert(client, "product_images", [
        {"product_id": p["id"], "url": f"product_{p['id']}_{n}.jpg"}
        for p in products
        for n in (1, 2)
    ])
    _insert(client, "product_metadata", [
        {"product_id": p["id"], "category_metadata_id": METADATA["id"], "metadata_value_id": value}
        for p, (_, _, value) in zip(products, PRODUCTS)
    ])
    logger.info("Seeded %s products in category %s", len(products), category["slug"])
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    seed(get_service_supabase())

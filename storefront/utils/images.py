from typing import Any, Dict, List, Optional
from storefront.config import BASE_URL

PRODUCTS_MEDIA = "media/products"
BANNERS_MEDIA = "media/banners"

def get_absolute_image_url(path: str) -> str:
    return f"{BASE_URL}/{path.lstrip('/')}"

def first_image_path(images: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    """Chemin relatif (media/products/...) de la première image par id, ou None."""
    ordered = sorted(images or [], key=lambda img: img.get("id") or 0)
    if not ordered or not ordered[0].get("url"):
        return None
    return f"{PRODUCTS_MEDIA}/{ordered[0]['url']}"

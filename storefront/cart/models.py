from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from storefront.orders.pricing import CartItem
from storefront.utils.validators import ZIPCODE_PATTERN

# Borne haute par ligne: garde total et quantité dans les colonnes numeric(10, 2) / integer
MAX_ITEM_QUANTITY = 999


class CartMountPayload(BaseModel):
    ids: List[int] = Field(min_length=1)


class ShippingQuery(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    zipcode: str = Field(pattern=ZIPCODE_PATTERN)


class CartItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: PositiveInt = Field(alias="productId")
    quantity: PositiveInt = Field(le=MAX_ITEM_QUANTITY)


class FinishPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cart: List[CartItemPayload] = Field(min_length=1)
    address_id: PositiveInt = Field(alias="addressId")

    def to_cart(self) -> Tuple[CartItem, ...]:
        return tuple(CartItem(product_id=i.product_id, quantity=i.quantity) for i in self.cart)

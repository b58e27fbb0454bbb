import pytest

from storefront.cart.models import MAX_ITEM_QUANTITY, CartMountPayload, FinishPayload, ShippingQuery
from storefront.orders.pricing import CartItem
from storefront.users.models import AddressPayload, RegisterPayload
from storefront.utils.validation import ParseFailure, ParseSuccess, safe_parse
from storefront.utils.validators import validate_password_strength


def test_safe_parse_success_carries_typed_value():
    result = safe_parse(FinishPayload, {"cart": [{"productId": 1, "quantity": 2}], "addressId": 10})
    assert isinstance(result, ParseSuccess)
    assert result.success is True
    assert result.data.address_id == 10
    assert result.data.to_cart() == (CartItem(product_id=1, quantity=2),)


@pytest.mark.parametrize("payload", [
    None,
    {},
    {"cart": [], "addressId": 10},
    {"cart": [{"productId": 1, "quantity": 0}], "addressId": 10},
    {"cart": [{"productId": 1, "quantity": 10**12}], "addressId": 10},
    {"cart": [{"productId": -1, "quantity": 1}], "addressId": 10},
    {"cart": [{"productId": 1, "quantity": 1}], "addressId": 0},
    {"cart": [{"productId": 1}], "addressId": 10},
    {"cart": "nope", "addressId": 10},
])
def test_safe_parse_failure_never_raises(payload):
    result = safe_parse(FinishPayload, payload)
    assert isinstance(result, ParseFailure)
    assert result.success is False
    assert result.errors


@pytest.mark.parametrize("zipcode,ok", [
    ("12345", True),
    ("12345-678", True),
    ("12345678", True),
    ("12345-6789", True),
    ("1234", False),
    ("abcde", False),
    ("", False),
])
def test_zipcode_pattern(zipcode, ok):
    assert safe_parse(ShippingQuery, {"zipcode": zipcode}).success is ok


def test_cart_mount_requires_ids():
    assert safe_parse(CartMountPayload, {"ids": [1, 2]}).success
    assert not safe_parse(CartMountPayload, {"ids": []}).success
    assert not safe_parse(CartMountPayload, {"ids": ["x"]}).success


def test_register_payload_rules():
    assert safe_parse(RegisterPayload, {"name": "Carol", "email": "carol@example.com", "password": "Secret123"}).success
    assert not safe_parse(RegisterPayload, {"name": "C", "email": "carol@example.com", "password": "Secret123"}).success
    assert not safe_parse(RegisterPayload, {"name": "Carol", "email": "not-an-email", "password": "Secret123"}).success
    assert not safe_parse(RegisterPayload, {"name": "Carol", "email": "carol@example.com", "password": "short1A"}).success
    assert not safe_parse(RegisterPayload, {"name": "Carol", "email": "carol@example.com", "password": "alllowercase1"}).success


def test_address_payload_optional_complement():
    data = {"zipcode": " 12345 ", "street": "Main", "number": "1", "city": "Springfield",
            "state": "IL", "country": "USA"}
    result = safe_parse(AddressPayload, data)
    assert result.success
    assert result.data.zipcode == "12345"
    assert result.data.complement is None
    assert not safe_parse(AddressPayload, {**data, "city": ""}).success


def test_password_strength_messages():
    assert validate_password_strength("Secret123") == "Secret123"
    with pytest.raises(ValueError):
        validate_password_strength("secret123")
    with pytest.raises(ValueError):
        validate_password_strength("SECRET123")
    with pytest.raises(ValueError):
        validate_password_strength("SecretABC")


def test_item_quantity_upper_bound():
    ok = {"cart": [{"productId": 1, "quantity": MAX_ITEM_QUANTITY}], "addressId": 10}
    too_many = {"cart": [{"productId": 1, "quantity": MAX_ITEM_QUANTITY + 1}], "addressId": 10}
    assert safe_parse(FinishPayload, ok).success
    assert not safe_parse(FinishPayload, too_many).success

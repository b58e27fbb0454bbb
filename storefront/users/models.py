from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from storefront.utils.validators import ZIPCODE_PATTERN, validate_password_strength


class RegisterPayload(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("password")
    def password_strength(cls, v: str) -> str:
        return validate_password_strength(v)


class LoginPayload(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AddressPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    zipcode: str = Field(pattern=ZIPCODE_PATTERN)
    street: str = Field(min_length=1)
    number: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)
    complement: Optional[str] = None

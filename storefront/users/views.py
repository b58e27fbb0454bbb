# module storefront.users.views

"""Endpoints utilisateurs (API JSON).
- /register, /login: inscription et émission d'un token opaque (rate-limités).
- /addresses: adresses de livraison de l'utilisateur authentifié.
"""

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from storefront.app_setup.dependencies import get_user_service
from storefront.errors import AuthError, NotFoundError, ValidationError
from storefront.users.models import AddressPayload, LoginPayload, RegisterPayload
from storefront.users.service import UserService
from storefront.utils.rate_limit import optional_rate_limit
from storefront.utils.security import AuthContext, require_user
from storefront.utils.validation import read_json, safe_parse

router = APIRouter(prefix="/api/v1/users", tags=["Users API"])

@router.post("/register", status_code=201, dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
async def register(request: Request, users: UserService = Depends(get_user_service)):
    """Inscription: 400 si le payload est invalide ou si l'email existe déjà."""
    result = safe_parse(RegisterPayload, await read_json(request))
    if not result.success:
        raise ValidationError("Invalid fields")

    payload = result.data
    user = await run_in_threadpool(users.register, payload.name, payload.email, payload.password)
    if not user:
        raise ValidationError("User already exists")
    return {"error": None, "user": user}

@router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
async def login(request: Request, users: UserService = Depends(get_user_service)):
    result = safe_parse(LoginPayload, await read_json(request))
    if not result.success:
        raise ValidationError("Invalid fields")

    token = await run_in_threadpool(users.login, result.data.email, result.data.password)
    if not token:
        raise AuthError()
    return {"error": None, "token": token}

@router.get("/addresses")
def list_addresses(auth: AuthContext = Depends(require_user), users: UserService = Depends(get_user_service)):
    return {"error": None, "addresses": users.list_addresses(auth.user_id)}

@router.post("/addresses", status_code=201)
async def create_address(
    request: Request,
    auth: AuthContext = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    result = safe_parse(AddressPayload, await read_json(request))
    if not result.success:
        raise ValidationError("Invalid address")

    address = await run_in_threadpool(users.create_address, auth.user_id, result.data.model_dump())
    return {"error": None, "address": address}

@router.delete("/addresses/{address_id}")
def delete_address(
    address_id: int,
    auth: AuthContext = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    if not users.delete_address(auth.user_id, address_id):
        raise NotFoundError("Address not found")
    return {"error": None}

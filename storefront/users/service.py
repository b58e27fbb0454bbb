from typing import Any, Dict, List, Optional
from uuid import uuid4
import logging

import bcrypt

from storefront.config import BCRYPT_ROUNDS
from storefront.users.repository import UserRepository

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), (hashed or "").encode("utf-8"))
    except ValueError:
        # Hash absent ou mal formé en base
        return False


class UserService:
    """
    Cas d'usage utilisateurs:
    - register / login (token opaque uuid4 stocké sur la ligne users)
    - resolve_token pour l'authentification des vues
    - gestion des adresses de livraison
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def register(self, name: str, email: str, password: str) -> Optional[Dict[str, Any]]:
        email = (email or "").strip().lower()
        if self.repository.get_user_by_email(email):
            return None

        user = self.repository.create_user(name=name.strip(), email=email, password_hash=hash_password(password))
        if not user:
            return None
        logger.info("users.register user_id=%s", user.get("id"))
        return {"id": user.get("id"), "name": user.get("name"), "email": user.get("email")}

    def login(self, email: str, password: str) -> Optional[str]:
        user = self.repository.get_user_by_email((email or "").strip().lower())
        if not user or not check_password(password, user.get("password") or ""):
            return None

        token = str(uuid4())
        self.repository.set_token(user["id"], token)
        return token

    def resolve_token(self, token: str) -> Optional[int]:
        if not token:
            return None
        return self.repository.get_user_id_by_token(token)

    def create_address(self, user_id: int, address: Dict[str, Any]) -> Dict[str, Any]:
        return self.repository.create_address(user_id, address)

    def list_addresses(self, user_id: int) -> List[Dict[str, Any]]:
        return self.repository.list_addresses(user_id)

    def get_address(self, user_id: int, address_id: int) -> Optional[Dict[str, Any]]:
        return self.repository.get_address(user_id, address_id)

    def delete_address(self, user_id: int, address_id: int) -> bool:
        return self.repository.delete_address(user_id, address_id)

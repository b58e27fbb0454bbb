"""Couche d'accès aux données (Supabase) pour les utilisateurs et leurs adresses.
- Tables: users (credentials + token de session), user_addresses.
- Lectures: exceptions journalisées puis valeurs neutres (None, []).
- Écritures: l'erreur Supabase est propagée sous forme de PersistenceError.
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from storefront.errors import PersistenceError

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = "id, zipcode, street, number, city, state, country, complement"


class UserRepository:
    def __init__(self, client: Client):
        self.client = client

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        try:
            res = self.client.table("users").select("*").eq("email", email).limit(1).execute()
            rows = res.data or []
            return rows[0] if rows else None
        except Exception:
            logger.exception("users.repository.get_user_by_email failed")
            return None

    def create_user(self, *, name: str, email: str, password_hash: str) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table("users")
                .insert({"name": name, "email": email, "password": password_hash})
                .execute()
            )
        except Exception as e:
            logger.exception("users.repository.create_user failed")
            raise PersistenceError() from e
        rows = res.data or []
        return rows[0] if rows else None

    def set_token(self, user_id: int, token: str) -> None:
        try:
            self.client.table("users").update({"token": token}).eq("id", user_id).execute()
        except Exception as e:
            logger.exception("users.repository.set_token failed user_id=%s", user_id)
            raise PersistenceError() from e

    def get_user_id_by_token(self, token: str) -> Optional[int]:
        try:
            res = self.client.table("users").select("id").eq("token", token).limit(1).execute()
        except Exception:
            logger.exception("users.repository.get_user_id_by_token failed")
            return None
        rows = res.data or []
        return int(rows[0]["id"]) if rows and rows[0].get("id") is not None else None

    def create_address(self, user_id: int, address: Dict[str, Any]) -> Dict[str, Any]:
        try:
            res = self.client.table("user_addresses").insert({**address, "user_id": user_id}).execute()
        except Exception as e:
            logger.exception("users.repository.create_address failed user_id=%s", user_id)
            raise PersistenceError() from e
        rows = res.data or []
        if not rows:
            raise PersistenceError()
        return {k: rows[0].get(k) for k in ADDRESS_FIELDS.split(", ")}

    def list_addresses(self, user_id: int) -> List[Dict[str, Any]]:
        try:
            res = (
                self.client.table("user_addresses")
                .select(ADDRESS_FIELDS)
                .eq("user_id", user_id)
                .order("id")
                .execute()
            )
            return res.data or []
        except Exception:
            logger.exception("users.repository.list_addresses failed user_id=%s", user_id)
            return []

    def get_address(self, user_id: int, address_id: int) -> Optional[Dict[str, Any]]:
        """Adresse filtrée par (id, user_id): une adresse d'un autre utilisateur renvoie None."""
        try:
            res = (
                self.client.table("user_addresses")
                .select(ADDRESS_FIELDS)
                .eq("id", address_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception:
            logger.exception("users.repository.get_address failed user_id=%s address_id=%s", user_id, address_id)
            return None
        rows = res.data or []
        return rows[0] if rows else None

    def delete_address(self, user_id: int, address_id: int) -> bool:
        try:
            res = (
                self.client.table("user_addresses")
                .delete()
                .eq("id", address_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            logger.exception("users.repository.delete_address failed user_id=%s address_id=%s", user_id, address_id)
            raise PersistenceError() from e
        return bool(res.data)

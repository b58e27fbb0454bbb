"""
Validation typée des entrées non typées (JSON, query string).

safe_parse(model, data) ne lève jamais: il renvoie ParseSuccess(data=<modèle>) ou
ParseFailure(errors=[...]) que la vue consomme avant toute logique métier.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Type, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ParseSuccess(Generic[T]):
    data: T
    success: bool = True


@dataclass(frozen=True)
class ParseFailure:
    errors: List[Dict[str, Any]] = field(default_factory=list)
    success: bool = False


ParseResult = Union[ParseSuccess[T], ParseFailure]


def safe_parse(model: Type[T], data: Any) -> "ParseResult[T]":
    if data is None:
        return ParseFailure(errors=[{"msg": "empty payload"}])
    try:
        return ParseSuccess(data=model.model_validate(data))
    except PydanticValidationError as e:
        return ParseFailure(errors=e.errors(include_url=False, include_context=False))


async def read_json(request: Request) -> Any:
    """Body JSON brut; None si absent ou invalide (traité comme un échec de parsing)."""
    try:
        return await request.json()
    except ValueError:
        return None


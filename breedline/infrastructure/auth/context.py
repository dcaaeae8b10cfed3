from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from breedline.application.errors import AuthError


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    claims: dict[str, Any]


def context_from_claims(claims: dict[str, Any]) -> AuthContext:
    subject = claims.get("sub")
    if not subject:
        raise AuthError("Token missing subject")
    try:
        user_id = UUID(str(subject))
    except ValueError as exc:
        raise AuthError("Token subject is not a valid UUID") from exc
    return AuthContext(user_id=user_id, claims=claims)

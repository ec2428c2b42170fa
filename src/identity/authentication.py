"""Bearer-token authentication as a FastAPI dependency."""

from fastapi import Header

from identity.directory import get_directory
from identity.principal import Principal
from shared.errors import Unauthenticated


async def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    if not authorization:
        raise Unauthenticated("Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid Authorization header format")

    principal = get_directory().authenticate(token.strip())
    if principal is None:
        raise Unauthenticated("Invalid token")
    return principal

"""Bearer Token Verification — resolves a JWT into the caller's user id.

Invariants:
    - Tokens are verified, never issued, here (issuance belongs to the auth service)
    - The identity claim is "id" when present, otherwise the standard "sub"
    - Any decode/verification failure raises AuthenticationError (401)
    - A user id wider than the user_id columns is rejected with 401, never stored
"""

import logging

from jose import JWTError, jwt

from postfeed.core.domain_types import USER_ID_MAX_LENGTH, UserId, user_id as to_user_id
from postfeed.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

IDENTITY_CLAIMS: tuple[str, ...] = ("id", "sub")


def decode_access_token(token: str, secret_key: str, algorithm: str) -> dict:
    """Verify signature and expiry, return the claims."""
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid authentication token")


def resolve_identity(token: str, secret_key: str, algorithm: str) -> UserId:
    """Decode the token and extract the caller's user id."""
    claims = decode_access_token(token, secret_key, algorithm)
    for claim in IDENTITY_CLAIMS:
        value = claims.get(claim)
        if value:
            identity = to_user_id(value)
            if len(identity) > USER_ID_MAX_LENGTH:
                raise AuthenticationError("Token user id is too long")
            return identity
    raise AuthenticationError("Token carries no user identity")

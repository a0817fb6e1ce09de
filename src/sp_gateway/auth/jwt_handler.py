"""Access token issue and verification.

HS256 (symmetric HMAC) signed with JWT_SECRET. Claims:
  - sub:  the integer user id, as a string
  - type: always "access"
  - iat / exp: lifetime is JWT_EXPIRE_MINUTES

No refresh tokens and no revocation: a token is valid until it expires.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.sp_common.errors import InvalidCredentialsError

_TOKEN_TYPE = "access"


def create_access_token(user_id: int) -> str:
    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "type": _TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return str(jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


def decode_access_token(token: str) -> int:
    """Verify the token and return the user id it was issued for.

    Raises:
        InvalidCredentialsError: bad signature, expired, wrong type or a
            subject that is not a user id.
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    subject = claims.get("sub")
    if claims.get("type") != _TOKEN_TYPE or not isinstance(subject, str) or not subject.isdigit():
        raise InvalidCredentialsError()
    return int(subject)

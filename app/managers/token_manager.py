"""Token manager for issuing and decoding principal JWTs."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import JWTError, jwt

from app.configs import settings
from app.schemas.auth import Role, TokenData


def token_lifetime(role: Role) -> timedelta:
    """Authors get a short-lived token, viewers a longer one."""
    minutes = (
        settings.AUTHOR_TOKEN_EXPIRE_MINUTES
        if role == "author"
        else settings.VIEWER_TOKEN_EXPIRE_MINUTES
    )
    return timedelta(minutes=minutes)


def create_access_token(
    user_id: UUID,
    username: str,
    role: Role,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new access token.

    Args:
        user_id: Principal's UUID
        username: Principal's username
        role: `author` or `viewer`
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or token_lifetime(role))

    to_encode = {
        "sub": username,
        "user_id": str(user_id),
        "role": role,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    username: str | None = payload.get("sub")
    user_id: str | None = payload.get("user_id")
    role: str | None = payload.get("role")

    if not username or not user_id or role not in ("author", "viewer"):
        return None

    try:
        return TokenData(username=username, user_id=UUID(user_id), role=role)
    except ValueError:
        return None

from jose import JWTError, jwt
from authz.config import settings
from authz.core.exceptions import UnauthorizedException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (caller id), 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

        # Validate expiration (jose checks this automatically)
        exp = payload.get("exp")
        if exp is None:
            raise UnauthorizedException("Token missing expiration")

        subject: str = payload.get("sub")
        if subject is None:
            raise UnauthorizedException("Token missing caller identifier")

        return payload

    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")


def extract_caller_id(token: str) -> str:
    """Extract the calling principal from JWT token"""
    payload = decode_jwt(token)
    return payload["sub"]

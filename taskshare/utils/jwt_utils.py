import jwt
from datetime import datetime, timedelta, timezone
from django.conf import settings

from taskshare.exceptions.auth_exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    RefreshTokenExpiredError,
)
from taskshare.constants.messages import AuthErrorMessages

TOKEN_ISSUER = "taskshare-auth"


def _generate_token(user_id: int, token_type: str, lifetime: int) -> str:
    now = datetime.now(timezone.utc)
    expiry = now + timedelta(seconds=lifetime)

    payload = {
        "iss": TOKEN_ISSUER,
        "exp": int(expiry.timestamp()),
        "iat": int(now.timestamp()),
        "sub": str(user_id),
        "user_id": user_id,
        "token_type": token_type,
    }
    return jwt.encode(
        payload=payload,
        key=settings.JWT_CONFIG.get("PRIVATE_KEY"),
        algorithm=settings.JWT_CONFIG.get("ALGORITHM"),
    )


def generate_access_token(user_data: dict) -> str:
    try:
        return _generate_token(
            user_data["user_id"], "access", settings.JWT_CONFIG.get("ACCESS_TOKEN_LIFETIME")
        )
    except Exception as e:
        raise TokenInvalidError(f"Token generation failed: {str(e)}")


def generate_refresh_token(user_data: dict) -> str:
    try:
        return _generate_token(
            user_data["user_id"], "refresh", settings.JWT_CONFIG.get("REFRESH_TOKEN_LIFETIME")
        )
    except Exception as e:
        raise TokenInvalidError(f"Refresh token generation failed: {str(e)}")


def _decode(token: str, token_type: str) -> dict:
    payload = jwt.decode(
        jwt=token,
        key=settings.JWT_CONFIG.get("PUBLIC_KEY"),
        algorithms=[settings.JWT_CONFIG.get("ALGORITHM")],
        issuer=TOKEN_ISSUER,
    )
    if payload.get("token_type") != token_type or not isinstance(payload.get("user_id"), int):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
    return payload


def validate_access_token(token: str) -> dict:
    try:
        return _decode(token, "access")
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {str(e)}")


def validate_refresh_token(token: str) -> dict:
    try:
        return _decode(token, "refresh")
    except jwt.ExpiredSignatureError:
        raise RefreshTokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid refresh token: {str(e)}")


def generate_token_pair(user_data: dict) -> dict:
    access_token = generate_access_token(user_data)
    refresh_token = generate_refresh_token(user_data)

    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "expires_in": settings.JWT_CONFIG.get("ACCESS_TOKEN_LIFETIME"),
    }

"""
JWT authentication for the REST API.

Browser clients carry the access token in an httpOnly cookie; API clients
and tests may send it in the Authorization header instead.

Token Sources (in order of precedence):
    1. Header: Authorization: Bearer <jwt_token>
    2. Cookie: <settings.JWT_COOKIE_NAME>=<jwt_token>

Related files:
    - views.py: signup/login/logout set and clear the cookie
    - config/settings.py: JWT_COOKIE_* and SIMPLE_JWT settings

Usage in config/settings.py:
    REST_FRAMEWORK = {
        "DEFAULT_AUTHENTICATION_CLASSES": [
            "authentication.authentication.CookieJWTAuthentication",
        ],
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import AccessToken

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.response import Response

    from authentication.models import User


class CookieJWTAuthentication(JWTAuthentication):
    """
    simplejwt authentication that also accepts the token from a cookie.

    An invalid or expired token raises InvalidToken (401), whichever
    source it came from. No token at all leaves the request anonymous.
    """

    def authenticate(self, request: Request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.JWT_COOKIE_NAME)

        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token


def issue_token(user: User) -> str:
    """Create a signed access token for the user."""
    return str(AccessToken.for_user(user))


def set_jwt_cookie(response: Response, token: str) -> None:
    """Attach the token cookie (httpOnly, SameSite=Strict) to a response."""
    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        token,
        max_age=settings.JWT_COOKIE_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="Strict",
        secure=settings.JWT_COOKIE_SECURE,
    )


def clear_jwt_cookie(response: Response) -> None:
    """Expire the token cookie on the client."""
    response.delete_cookie(settings.JWT_COOKIE_NAME, samesite="Strict")

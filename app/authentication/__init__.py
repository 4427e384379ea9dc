"""
Authentication application.

This app provides the user model, cookie/bearer JWT authentication,
signup/login/logout and profile management.

Key components:
    - User model: Email-based identity with avatar and symmetric friends
    - CookieJWTAuthentication: simplejwt token from header or cookie
    - AuthService / UserService: Business logic for accounts and profiles

Usage:
    from authentication.models import User
    from authentication.services import AuthService, UserService
"""

"""
Authentication views.

This module provides API views for:
- Session lifecycle: signup, login, logout, check
- Profile management: get, update (multipart avatar), delete
- User lookups: search and detail

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService, UserService)
    - authentication.py: JWT cookie helpers
    - urls.py: URL routing

Note:
    Signup and login answer with the user and set the httpOnly `jwt`
    cookie; logout and account deletion clear it.
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.authentication import (
    clear_jwt_cookie,
    issue_token,
    set_jwt_cookie,
)
from authentication.serializers import (
    LoginSerializer,
    ProfileUpdateSerializer,
    SignupSerializer,
    UserSerializer,
)
from authentication.services import AuthService, UserService


# =============================================================================
# Session Views
# =============================================================================


class SignupView(APIView):
    """
    API view for account creation.

    POST: Create account, set jwt cookie

    URL: /api/v1/auth/signup/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="signup",
        summary="Sign up",
        tags=["Auth"],
        request=SignupSerializer,
        responses={201: UserSerializer},
    )
    def post(self, request):
        """
        Create an account and log it in.

        Request body:
            {"full_name": "Ada Lovelace", "email": "ada@example.com", "password": "secret1"}
        """
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.signup(**serializer.validated_data)

        response = Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
        set_jwt_cookie(response, issue_token(user))
        return response


class LoginView(APIView):
    """
    API view for email/password login.

    POST: Check credentials, set jwt cookie

    URL: /api/v1/auth/login/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="login",
        summary="Log in",
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: UserSerializer},
    )
    def post(self, request):
        """Log in and receive the session cookie."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.login(**serializer.validated_data)

        response = Response(UserSerializer(user).data)
        set_jwt_cookie(response, issue_token(user))
        return response


class LogoutView(APIView):
    """
    API view for logout.

    POST: Clear jwt cookie, record last_seen

    URL: /api/v1/auth/logout/
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="logout",
        summary="Log out",
        tags=["Auth"],
        request=None,
    )
    def post(self, request):
        """Clear the session cookie. Anonymous callers just get it cleared."""
        if request.user.is_authenticated:
            AuthService.logout(request.user)

        response = Response({"message": "Logged out successfully"})
        clear_jwt_cookie(response)
        return response


class CheckAuthView(APIView):
    """
    API view returning the current user.

    GET: Current user or 401

    URL: /api/v1/auth/check/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="check_auth",
        summary="Current user",
        tags=["Auth"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)


# =============================================================================
# Profile & User Views
# =============================================================================


class ProfileView(APIView):
    """
    API view for the current user's profile.

    GET: Retrieve profile
    PUT: Update full_name, email and/or avatar (multipart for avatar)
    DELETE: Delete account, clear jwt cookie

    URL: /api/v1/users/profile/
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        operation_id="get_profile",
        summary="Get profile",
        tags=["Users"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        operation_id="update_profile",
        summary="Update profile",
        tags=["Users"],
        request=ProfileUpdateSerializer,
        responses={200: UserSerializer},
    )
    def put(self, request):
        """
        Update the provided profile fields.

        Request body (multipart or JSON):
            {
                "full_name": "Ada King",     // Optional
                "email": "ada@example.com",  // Optional
                "avatar": <file>             // Optional, replaces stored avatar
            }
        """
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = UserService.update_profile(request.user, **serializer.validated_data)
        return Response(UserSerializer(user).data)

    @extend_schema(
        operation_id="delete_profile",
        summary="Delete account",
        tags=["Users"],
        responses={200: None},
    )
    def delete(self, request):
        """Delete the account and its stored avatar."""
        UserService.delete_profile(request.user)

        response = Response({"message": "Profile deleted successfully"})
        clear_jwt_cookie(response)
        return response


class UserSearchView(APIView):
    """
    API view for user search.

    GET: Users whose name or email contains ?query=

    URL: /api/v1/users/search/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="search_users",
        summary="Search users",
        tags=["Users"],
        parameters=[
            OpenApiParameter("query", OpenApiTypes.STR, OpenApiParameter.QUERY),
        ],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        users = UserService.search_users(
            request.user, request.query_params.get("query", "")
        )
        return Response(UserSerializer(users, many=True).data)


class UserDetailView(APIView):
    """
    API view for a single user.

    GET: User by id

    URL: /api/v1/users/{id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_user",
        summary="Get user",
        tags=["Users"],
        responses={200: UserSerializer},
    )
    def get(self, request, user_id):
        return Response(UserSerializer(UserService.get_user(user_id)).data)

"""
Accounts Service Layer

Local registration and login, Google sign-in and JWT handling,
separated from views for better testability.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone as django_timezone
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from core.errors import BadRequestError, ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)


def issue_token(user) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user: User model instance

    Returns:
        Encoded JWT carrying sub (user id), email, iat and exp
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.pk),
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(seconds=settings.JWT_EXPIRES_IN),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode and validate an access token.

    Raises:
        UnauthorizedError: If the token is expired or invalid
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        logger.warning("Token expired")
        raise UnauthorizedError("Token expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise UnauthorizedError("Invalid token") from e


def get_user_for_token(token: str):
    """Return the active user a token was issued to."""
    payload = decode_token(token)
    subject = str(payload.get("sub") or "")
    User = get_user_model()
    user = None
    if subject.isdigit():
        user = User.objects.filter(pk=int(subject), is_active=True).first()
    if user is None:
        logger.warning("Token subject %s does not match an active user", subject)
        raise UnauthorizedError("User not found")
    return user


def _unique_username(base: str) -> str:
    User = get_user_model()
    base = base[:140] or "user"
    candidate = base
    suffix = 1
    while User.objects.filter(username=candidate).exists():
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def register_user(
    email: str,
    password: str,
    username: str = "",
    first_name: str = "",
    last_name: str = "",
):
    """
    Create a local account.

    Raises:
        BadRequestError: If the password fails AUTH_PASSWORD_VALIDATORS
        ConflictError: If the email or the requested username is taken
    """
    User = get_user_model()
    logger.info("Registering user: %s", email)

    if User.objects.filter(email__iexact=email).exists():
        logger.warning("Registration rejected, email already registered: %s", email)
        raise ConflictError("Email already registered")

    if username:
        if User.objects.filter(username=username).exists():
            raise ConflictError("Username already taken")
    else:
        username = _unique_username(email.split("@")[0])

    try:
        validate_password(
            password, user=User(username=username, email=email, first_name=first_name, last_name=last_name)
        )
    except ValidationError as e:
        raise BadRequestError("Validation failed", errors={"password": list(e.messages)}) from e

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                auth_provider=User.AuthProvider.LOCAL,
            )
    except IntegrityError as e:
        logger.warning("Registration for %s lost a race with a concurrent sign-up", email)
        raise ConflictError("Email already registered") from e

    logger.info("Registered user %s", user.pk)
    return user


def _touch_last_login(user) -> None:
    user.last_login = django_timezone.now()
    user.save(update_fields=["last_login"])


def login_user(email: str, password: str):
    """
    Check local credentials.

    Raises:
        UnauthorizedError: If no active user matches the email and password
    """
    User = get_user_model()
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.warning("Invalid credentials for email: %s", email)
        raise UnauthorizedError("Invalid credentials")

    _touch_last_login(user)
    logger.info("User %s logged in", user.pk)
    return user


def verify_google_token(token: str) -> dict:
    """
    Verify a Google ID token against the configured client id.

    Returns:
        The token claims

    Raises:
        UnauthorizedError: If Google sign-in is not configured, the token is
            rejected, or the account email is not verified
    """
    if not settings.GOOGLE_CLIENT_ID:
        logger.error("Google sign-in attempted but GOOGLE_CLIENT_ID is not set")
        raise UnauthorizedError("Google sign-in is not configured")

    try:
        claims = google_id_token.verify_oauth2_token(
            token, google_requests.Request(), settings.GOOGLE_CLIENT_ID
        )
    except (ValueError, google_exceptions.GoogleAuthError) as e:
        logger.warning("Rejected Google token: %s", e)
        raise UnauthorizedError("Invalid Google token") from e

    if not claims.get("email") or not claims.get("email_verified"):
        raise UnauthorizedError("Google account email is not verified")
    return claims


def login_with_google(token: str):
    """
    Sign in with a Google ID token, creating the account on first sight.

    Existing accounts are matched by email.
    """
    claims = verify_google_token(token)
    email = claims["email"].lower()
    User = get_user_model()

    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        user = User(
            username=_unique_username(email.split("@")[0]),
            email=email,
            first_name=claims.get("given_name", "")[:150],
            last_name=claims.get("family_name", "")[:150],
            auth_provider=User.AuthProvider.GOOGLE,
        )
        user.set_unusable_password()
        user.save()
        logger.info("Created Google user %s", user.pk)
    elif not user.is_active:
        logger.warning("Inactive user %s attempted Google sign-in", user.pk)
        raise UnauthorizedError("Invalid credentials")

    _touch_last_login(user)
    return user

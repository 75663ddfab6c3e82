from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from config.http import read_json, validate

from .decorators import jwt_required
from .forms import GoogleLoginForm, LoginForm, RegistrationForm
from .services import issue_token, login_user, login_with_google, register_user


def serialize_user(user) -> dict:
    return {
        "id": user.pk,
        "email": user.email,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "auth_provider": user.auth_provider,
    }


def _token_response(user, status=200):
    return JsonResponse(
        {"access_token": issue_token(user), "user": serialize_user(user)}, status=status
    )


@csrf_exempt
@require_POST
def register_view(request):
    data = validate(RegistrationForm(read_json(request)))
    user = register_user(**data)
    return _token_response(user, status=201)


@csrf_exempt
@require_POST
def login_view(request):
    data = validate(LoginForm(read_json(request)))
    user = login_user(data["email"], data["password"])
    return _token_response(user)


@csrf_exempt
@require_POST
def google_login_view(request):
    """Exchange a Google ID token for an access token."""
    data = validate(GoogleLoginForm(read_json(request)))
    user = login_with_google(data["id_token"])
    return _token_response(user)


@require_GET
@jwt_required
def me_view(request):
    return JsonResponse(serialize_user(request.user))

from functools import wraps

from core.errors import UnauthorizedError

from .services import get_user_for_token


def jwt_required(view_func):
    """
    Require an "Authorization: Bearer <token>" header.

    Sets request.user and request.user_id to the token's user.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthorizedError("Authentication credentials were not provided")

        user = get_user_for_token(token.strip())
        request.user = user
        request.user_id = user.pk
        return view_func(request, *args, **kwargs)

    return wrapper

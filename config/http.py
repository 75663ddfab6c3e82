"""
Helpers shared by the JSON views.
"""
import json

from core.errors import BadRequestError


def read_json(request) -> dict:
    """Parse the request body as a JSON object (empty body gives {})."""
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as e:
        raise BadRequestError("Malformed JSON body") from e
    if not isinstance(payload, dict):
        raise BadRequestError("JSON body must be an object")
    return payload


def validate(form):
    """Return form.cleaned_data or raise BadRequestError with the field errors."""
    if not form.is_valid():
        errors = {field: [str(e) for e in messages] for field, messages in form.errors.items()}
        raise BadRequestError("Validation failed", errors=errors)
    return form.cleaned_data

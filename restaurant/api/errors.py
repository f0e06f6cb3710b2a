"""Exception handlers turning errors into the JSON envelope.

``AppError`` subclasses carry their own status code. Request-schema
failures from FastAPI/Pydantic are reduced to the first failing field and
a single readable sentence, always with 422.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from restaurant.api.responses import error_envelope
from restaurant.domain.exceptions import AppError
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

_MESSAGES = {
    "missing": "The {field} field is required.",
    "string_type": "The {field} field must be a string.",
    "string_too_short": "The {field} field is required.",
    "string_too_long": "The {field} field may not be greater than {max_length} characters.",
    "int_type": "The {field} field must be an integer.",
    "int_parsing": "The {field} field must be an integer.",
    "int_from_float": "The {field} field must be an integer.",
    "decimal_type": "The {field} field must be a number.",
    "decimal_parsing": "The {field} field must be a number.",
    "decimal_max_places": "The {field} field may not have more than {decimal_places} decimal places.",
    "decimal_max_digits": "The {field} field may not have more than {max_digits} digits.",
    "greater_than_equal": "The {field} field must be at least {ge}.",
    "less_than_equal": "The {field} field may not be greater than {le}.",
    "list_type": "The {field} field must be a list.",
    "too_short": "The {field} field must contain at least {min_length} item(s).",
    "enum": "The selected {field} is invalid.",
    "literal_error": "The selected {field} is invalid.",
    "string_pattern_mismatch": "The selected {field} is invalid.",
    "model_attributes_type": "The {field} field must be an object.",
    "dict_type": "The {field} field must be an object.",
    "json_invalid": "The request body is not valid JSON.",
}


def _field_name(loc) -> str:
    # ("body", "lines", 0, "quantity") -> "quantity"
    names = [part for part in loc if isinstance(part, str) and part not in ("body", "query", "path")]
    return names[-1] if names else "request"


def first_error_message(errors) -> str:
    if not errors:
        return "The given data was invalid."

    error = errors[0]
    field = _field_name(error.get("loc", ()))
    template = _MESSAGES.get(error.get("type"))
    if template is None:
        return f"The {field} field is invalid."

    ctx = {key: value for key, value in (error.get("ctx") or {}).items()}
    try:
        return template.format(field=field, **ctx)
    except (KeyError, IndexError):
        return f"The {field} field is invalid."


async def app_error_handler(request: Request, exc: AppError):
    return error_envelope(exc.message, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = first_error_message(exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return error_envelope(message, 422)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

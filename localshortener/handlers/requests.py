"""Request parsing shared by the route handlers"""

import json
from typing import Any

from localshortener.types import HandlerEvent


class BadRequestBody(ValueError):
    """Raised when a request body isn't a JSON object."""


def parse_json_body(event: HandlerEvent) -> dict[str, Any]:
    """Parse the JSON object carried in `event['body']` (an absent body is `{}`)

    Raises:
        BadRequestBody:
            If the body isn't valid JSON or isn't a JSON object.
    """
    body = event.get('body') or '{}'
    if isinstance(body, dict):
        return body

    try:
        document = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequestBody('invalid JSON body') from e

    if not isinstance(document, dict):
        raise BadRequestBody('JSON body must be an object')
    return document


def header(event: HandlerEvent, name: str) -> str | None:
    """Return a request header, matched case-insensitively"""
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == name.lower():
            return value
    return None

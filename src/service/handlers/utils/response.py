"""
API Gateway response envelope helpers.
"""

from typing import Any, Dict

import simplejson
from aws_lambda_powertools.event_handler import Response

CONTENT_TYPE = 'Application/Json'


def _json_default(obj: Any) -> Any:
    # DynamoDB hands string and number sets back as Python sets
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f'Object of type {type(obj).__name__} is not JSON serializable')


def to_json(payload: Any) -> str:
    """Serialize a payload to a JSON string; Decimals are written as exact JSON numbers."""
    return simplejson.dumps(payload, use_decimal=True, default=_json_default)


def build_response(status_code: int, body: Any) -> Response:
    """Build the resolver response for a route handler; the body is always a JSON string."""
    return Response(
        status_code=status_code,
        content_type=CONTENT_TYPE,
        body=to_json(body),
    )


def to_envelope(result: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten resolver output into the proxy response envelope.

    The REST resolver reports headers as ``multiValueHeaders``; the envelope
    carries one value per header.
    """
    headers = {
        name: values[-1]
        for name, values in (result.get('multiValueHeaders') or {}).items()
        if values
    }
    headers.update(result.get('headers') or {})

    return {
        'statusCode': result['statusCode'],
        'headers': headers,
        'body': result['body'],
    }


def create_api_response(status_code: int, body: Any) -> Dict[str, Any]:
    """
    Create the API Gateway proxy response envelope.

    Args:
        status_code: HTTP status code
        body: Payload to serialize; the envelope body is always a JSON string

    Returns:
        Envelope with statusCode, headers and body
    """
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': CONTENT_TYPE,
        },
        'body': to_json(body),
    }

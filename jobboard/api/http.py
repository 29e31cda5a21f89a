"""
HTTP helpers shared by the job-board components.
"""
import json
from typing import Any, Dict, Optional

import httpx

from .errors import ProtocolError, ServerError
from ..utils.config import Config

JSON_CONTENT_TYPE = "application/json"


def build_client(config: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the async client used for every backend call.

    Args:
        config: Source of the base URL and request timeout
        transport: Optional transport, e.g. ``httpx.MockTransport`` in tests
    """
    return httpx.AsyncClient(
        base_url=config.api_url,
        timeout=config.timeout,
        transport=transport,
    )

def bearer_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}

def is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type")
    return bool(content_type) and JSON_CONTENT_TYPE in content_type

def ensure_json(response: httpx.Response, message: Optional[str] = None) -> None:
    """Raise ProtocolError unless the response declares a JSON body."""
    if not is_json_response(response):
        raise ProtocolError(message or f"Server returned non-JSON response ({response.status_code})")

def parse_json(response: httpx.Response) -> Any:
    """Decode the body; a decoding failure is a ProtocolError of its own."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProtocolError("Failed to parse server response. Please try again.") from e

def ensure_success(response: httpx.Response, data: Any = None) -> None:
    """Raise ServerError for a non-2xx status.

    The backend's ``error`` text is used when the parsed body carries one.
    """
    if response.is_success:
        return
    message = None
    if isinstance(data, dict) and data.get("error"):
        message = str(data["error"])
    raise ServerError(message or f"Server returned error ({response.status_code})", response.status_code)

def body_preview(response: httpx.Response, limit: int = 500) -> str:
    try:
        return response.text[:limit]
    except UnicodeDecodeError:
        return "<undecodable body>"

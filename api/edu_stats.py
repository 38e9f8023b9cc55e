import json
from typing import Any, Dict, Mapping

from edustats.service import lookup


def _query_params(request: Any) -> Mapping[str, Any]:
    if isinstance(request, Mapping):
        return request.get("queryStringParameters") or request.get("query") or {}
    return getattr(request, "args", None) or getattr(request, "query", None) or {}


def handler(request) -> Dict[str, Any]:  # Vercel signature
    status, body = lookup(_query_params(request))
    return {
        "statusCode": int(status),
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }

from typing import Any, Dict
from fastapi import Request


def describe_request(method: str, request: Request, values: Dict[str, Any]) -> str:
    """
    Append name:value for every query parameter the caller actually sent,
    e.g. GetMovies:q:ring:year:2001. Values of None are left out.
    """
    for name, value in values.items():
        if value is None or name not in request.query_params:
            continue
        method = f"{method}:{name}:{value}"

    return method

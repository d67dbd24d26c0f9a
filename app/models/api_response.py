from pydantic import BaseModel
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')

class APIError(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None

class APIResponse(BaseModel, Generic[T]):
    """Envelope for error replies; successful listings and lookups return the bare records."""
    status: str
    data: Optional[T] = None
    error: Optional[APIError] = None

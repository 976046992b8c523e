from typing import Any, Optional

from rest_framework import status as http_status
from rest_framework.response import Response


def ok(data: Any = None, message: Optional[str] = None, status: int = http_status.HTTP_200_OK) -> Response:
    """Success envelope: ``{"success": true, "data": ..., "message": ...}``."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return Response(body, status=status)


def paginate(qs, page: Optional[int], page_size: Optional[int]):
    """Slice ``qs`` when a page size was asked for; returns ``(items, total)``."""
    total = qs.count()
    if page_size:
        start = ((page or 1) - 1) * page_size
        qs = qs[start:start + page_size]
    return qs, total

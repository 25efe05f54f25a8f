"""
Browser session binding: selects the per-session patient store.
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import get_settings


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Reads the session header (``X-Session-ID`` by default) into
    ``request.state.session_id``. A new id is issued when the header is
    missing; clients send it back on later requests.
    """

    def __init__(self, app, header_name: str = None):
        super().__init__(app)
        self.header_name = header_name or get_settings().session.header_name

    async def dispatch(self, request: Request, call_next):
        session_id = request.headers.get(self.header_name, "").strip() or uuid.uuid4().hex
        request.state.session_id = session_id
        response = await call_next(request)
        response.headers[self.header_name] = session_id
        return response

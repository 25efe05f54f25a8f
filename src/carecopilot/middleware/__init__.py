from .performance_middleware import PerformanceMiddleware
from .request_id_middleware import RequestIDMiddleware
from .session_middleware import SessionMiddleware

__all__ = ["PerformanceMiddleware", "RequestIDMiddleware", "SessionMiddleware"]

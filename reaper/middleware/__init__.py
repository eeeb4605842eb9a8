"""ASGI middleware."""

from reaper.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]

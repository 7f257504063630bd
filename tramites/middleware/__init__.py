"""HTTP middleware: timeout and request/correlation ids.

Applied in tramites.main; the last added is the outermost.
"""

from tramites.middleware.request_context import RequestContextMiddleware
from tramites.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestContextMiddleware", "TimeoutMiddleware"]

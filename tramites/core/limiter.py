"""Shared SlowAPI limiter and the rate limit strings for anonymous endpoints.

Route modules and main import the same instance so app.state.limiter and
the decorators agree.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

PUBLIC_REGISTER_LIMIT = "10/minute"
TRACK_LIMIT = "60/minute"
LOGIN_LIMIT = "10/minute"

limit_public_register = limiter.limit(PUBLIC_REGISTER_LIMIT)
limit_track = limiter.limit(TRACK_LIMIT)
limit_login = limiter.limit(LOGIN_LIMIT)

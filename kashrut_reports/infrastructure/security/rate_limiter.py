"""
Rate limiting shared by the blueprints.

Set RATELIMIT_ENABLED=False in the app config to turn it off (tests).
"""
from flask import request
from flask_limiter import Limiter


def _get_real_ip():
    """Client IP behind a load balancer."""
    return (
        request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
        or request.remote_addr
        or "127.0.0.1"
    )


limiter = Limiter(
    key_func=_get_real_ip,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://",
    strategy="fixed-window",
)


def init_limiter(app):
    limiter.init_app(app)


def upload_limit():
    """Uploads: 20 per minute per IP."""
    return limiter.limit("20 per minute", error_message="Upload limit exceeded. Please wait a minute.")

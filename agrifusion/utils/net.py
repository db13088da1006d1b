# agrifusion/utils/net.py
from flask import request


def get_client_ip():
    # honor proxies/load balancers if present
    xff = request.headers.get("X-Forwarded-For", "")
    if xff:
        # first ip in list is original client
        return xff.split(",")[0].strip() or None
    return (
        request.headers.get("X-Real-IP")
        or request.headers.get("CF-Connecting-IP")  # Cloudflare
        or request.remote_addr
        or None
    )


def parse_bool(v, default=False):
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(v, default=0):
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def parse_opt_int(v):
    if v is None:
        return None
    if isinstance(v, str) and v.strip().lower() in {"", "null"}:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def parse_opt_count(v):
    """Like ``parse_opt_int`` but negative values clamp to 0."""
    n = parse_opt_int(v)
    return None if n is None else max(0, n)

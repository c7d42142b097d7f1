"""
Rate limiting configuration for the Raz API.

Uses Flask-Limiter to protect API endpoints from abuse. Every search or
detail request can cost one OMDb call, and OMDb keys carry a daily quota.

Rate Limit Tiers:
- Heavy: /api/search, /api/content (may hit OMDb)
- Light: /api/health, /api/cache/stats (local reads)
"""

import os
from flask import request, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize limiter (will be attached to app in create_app)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "200 per hour"],
    storage_uri=os.environ.get("RATELIMIT_STORAGE_URI", "memory://"),
    strategy="fixed-window",
    headers_enabled=True,  # Add X-RateLimit-* headers to responses
)


# ==============================================================================
# RATE LIMIT TIERS
# ==============================================================================

# Heavy operations - may reach OMDb
HEAVY_LIMIT = "30 per minute"

# Light operations - fast local reads
LIGHT_LIMIT = "120 per minute"


# ==============================================================================
# RATE LIMIT DECORATORS
# ==============================================================================

def limit_heavy(f):
    """Apply heavy rate limit to operations that may call OMDb."""
    return limiter.limit(HEAVY_LIMIT)(f)


def limit_light(f):
    """Apply light rate limit to cheap operations."""
    return limiter.limit(LIGHT_LIMIT)(f)


# ==============================================================================
# ERROR HANDLER
# ==============================================================================

def rate_limit_exceeded_handler(e):
    """Custom handler for rate limit exceeded errors."""
    retry_after = e.retry_after if hasattr(e, 'retry_after') else 60

    response = jsonify({
        "error": "Rate limit exceeded",
        "code": "rate_limited",
        "message": str(e.description),
        "path": request.path,
        "retry_after": retry_after
    })
    response.status_code = 429
    response.headers['Retry-After'] = str(retry_after)
    return response


# ==============================================================================
# INITIALIZATION
# ==============================================================================

def init_rate_limiting(app):
    """
    Initialize rate limiting for a Flask app.

    Call this in create_app() after app configuration.
    """
    limiter.init_app(app)

    # Register custom error handler
    app.errorhandler(429)(rate_limit_exceeded_handler)

    # Optionally disable rate limiting (tests, local development)
    if app.config.get('DISABLE_RATE_LIMITING'):
        limiter.enabled = False

    return limiter

# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import os
import time
import uuid
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request, g


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def create_app(config: Optional[Mapping[str, Any]] = None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # =============================================================================
    # CONFIGURATION
    # =============================================================================
    max_entries = os.environ.get('REQUEST_CACHE_MAX_ENTRIES')
    app.config.from_mapping(
        JSON_SORT_KEYS=False,
        OMDB_API_KEY=os.environ.get('OMDB_API_KEY'),
        OMDB_TRANSPORT=None,
        REQUEST_CACHE_MAX_ENTRIES=int(max_entries) if max_entries else None,
        REQUEST_CACHE_RETAIN_FAILURES=_env_flag('REQUEST_CACHE_RETAIN_FAILURES', 'true'),
        DISABLE_RATE_LIMITING=_env_flag('DISABLE_RATE_LIMITING'),
        HOST=os.environ.get('FLASK_HOST', '127.0.0.1'),
        PORT=int(os.environ.get('FLASK_PORT', '5000')),
        DEBUG=_env_flag('FLASK_DEBUG'),
    )
    if config:
        app.config.update(config)

    # Ensure instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    # =============================================================================
    # LOGGING, RATE LIMITING, and OTHER EXTENSIONS
    # =============================================================================
    from .log import log, debug_log_event
    from .rate_limit import init_rate_limiting
    from .extensions import init_services

    init_rate_limiting(app)
    init_services(app)

    @app.before_request
    def assign_request_id():
        g.request_id = uuid.uuid4().hex[:12]
        g.request_start = time.time()

    @app.after_request
    def debug_request_log(response):
        duration_ms = None
        start_time = getattr(g, 'request_start', None)
        if start_time:
            duration_ms = int((time.time() - start_time) * 1000)
        debug_log_event({
            'event': 'request',
            'request_id': getattr(g, 'request_id', None),
            'method': request.method,
            'path': request.path,
            'query': request.query_string.decode('utf-8', errors='ignore'),
            'status': response.status_code,
            'duration_ms': duration_ms,
            'remote_addr': request.remote_addr,
        })
        return response

    @app.teardown_request
    def debug_exception_log(error=None):
        if not error:
            return
        debug_log_event({
            'event': 'exception',
            'request_id': getattr(g, 'request_id', None),
            'method': request.method if request else None,
            'path': request.path if request else None,
            'error_type': error.__class__.__name__,
            'error': str(error)
        })

    # =============================================================================
    # BLUEPRINTS & ROUTES
    # =============================================================================
    from .routes.main_api import main_bp
    from .routes.search_api import search_bp
    from .routes.content_api import content_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(content_bp)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Endpoint not found', 'code': 'not_found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        log(f"Internal error: {error}")
        return jsonify({'error': 'Internal server error', 'code': 'internal_error'}), 500

    log(f"🎬 Raz ready on http://{app.config['HOST']}:{app.config['PORT']}")
    if app.config['DEBUG']:
        log("⚠️  Debug mode is ON - do not use in production!")

    return app

# App instance should be created by the caller (run.py or WSGI entrypoint)

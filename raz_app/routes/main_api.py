from flask import Blueprint, jsonify

from ..extensions import get_services
from ..rate_limit import limit_light

main_bp = Blueprint('main_api', __name__)


@main_bp.route('/api/health')
@limit_light
def health():
    services = get_services()
    return jsonify({
        'status': 'ok',
        'api_key_configured': services.client.has_api_key,
    })


@main_bp.route('/api/cache/stats')
@limit_light
def cache_stats():
    """Request cache metrics (entries are never listed, keys may hold user queries)."""
    return jsonify(get_services().cache.stats())

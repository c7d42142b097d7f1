"""
================================================================================
Raz - Search API Routes
================================================================================
  GET /api/search?q=QUERY               classified search outcome
  GET /api/search/person?name=NAME      search triggered by clicking a name

Status codes:
  200  results, or OMDb found nothing ("status": "no_results")
  400  query too short or too long
  502  OMDb could not be reached or answered garbage
================================================================================
"""

from flask import Blueprint, jsonify, request

from ..extensions import get_services
from ..log import log
from ..omdb.search import MIN_QUERY_LENGTH, is_searchable
from ..rate_limit import limit_heavy
from .validators import MAX_QUERY_LENGTH, sanitize_string

search_bp = Blueprint('search_api', __name__, url_prefix='/api/search')


def _run_search(raw: str, person: bool = False):
    if len(raw) > MAX_QUERY_LENGTH:
        return jsonify({
            'error': f'Query too long (max {MAX_QUERY_LENGTH} characters)',
            'code': 'invalid_request',
        }), 400

    query = sanitize_string(raw, max_length=MAX_QUERY_LENGTH)
    if not query:
        # Blank input clears the result lists
        return jsonify({'query': '', 'status': 'cleared'})

    if not is_searchable(query):
        return jsonify({
            'error': f'Query too short (min {MIN_QUERY_LENGTH} characters)',
            'code': 'invalid_request',
        }), 400

    services = get_services()
    log(f"🔍 Searching OMDb for '{query}'...")
    orchestrator = services.search
    coro = orchestrator.search_person(query) if person else orchestrator.search(query)
    outcome = services.runner.run(coro)

    payload = outcome.to_dict()
    if outcome.is_failure:
        log(f"⚠️ Search for '{query}' failed: {outcome.failure}")
        return jsonify(payload), 502
    return jsonify(payload)


@search_bp.route('', methods=['GET'])
@limit_heavy
def search():
    return _run_search(request.args.get('q', ''))


@search_bp.route('/person', methods=['GET'])
@limit_heavy
def search_person():
    return _run_search(request.args.get('name', ''), person=True)

"""
================================================================================
Raz - Content Detail Routes
================================================================================
  GET /api/content/<kind>/<imdb_id>    full record as a DetailRequestState

Status codes:
  200  success
  400  unknown kind or malformed IMDb id
  404  OMDb answered with an Error ("Incorrect IMDb ID.")
  502  OMDb unreachable, malformed response, or no API key
================================================================================
"""

from flask import Blueprint, jsonify, url_for

from ..extensions import get_services
from ..log import log
from ..omdb.errors import ApiLogicalError
from ..omdb.models import RequestStatus
from ..rate_limit import limit_heavy
from .validators import validate_imdb_id, validate_kind

content_bp = Blueprint('content_api', __name__, url_prefix='/api/content')


def _person_links(names):
    """Every credited name links to a search for that name."""
    return [
        {'name': name, 'search_url': url_for('search_api.search_person', name=name)}
        for name in names
    ]


@content_bp.route('/<kind>/<imdb_id>', methods=['GET'])
@limit_heavy
def get_content(kind, imdb_id):
    content_kind, error = validate_kind(kind)
    if error:
        return jsonify({'error': error, 'code': 'invalid_request'}), 400
    error = validate_imdb_id(imdb_id)
    if error:
        return jsonify({'error': error, 'code': 'invalid_request'}), 400

    services = get_services()

    async def _load():
        orchestrator = services.new_detail()
        orchestrator.open(content_kind, imdb_id)
        return await orchestrator.wait()

    state = services.runner.run(_load())
    payload = state.to_dict()

    if state.status == RequestStatus.SUCCESS:
        payload['person_links'] = {
            'directors': _person_links(state.detail.directors),
            'writers': _person_links(state.detail.writers),
        }
        return jsonify(payload)

    log(f"⚠️ Detail for /{content_kind.value}/{imdb_id} failed: {state.reason}")
    status_code = 404 if state.code == ApiLogicalError.code else 502
    return jsonify(payload), status_code

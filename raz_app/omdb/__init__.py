"""
OMDb integration for Raz.

Exports:
  - OmdbClient: async HTTP access to the OMDb API
  - SearchOrchestrator: query -> classified SearchOutcome
  - DetailOrchestrator: (kind, imdb id) -> observable DetailRequestState
"""

from .client import OmdbClient
from .detail import DetailOrchestrator
from .errors import ApiLogicalError, OmdbConfigError, OmdbError, ParseError, TransportError
from .models import (
    ContentDetail,
    ContentKind,
    ContentSummary,
    DetailKey,
    DetailRequestState,
    RequestStatus,
    SearchBuckets,
    SearchOutcome,
    SearchStatus,
)
from .search import MIN_QUERY_LENGTH, SearchOrchestrator, classify, is_searchable

__all__ = [
    'OmdbClient',
    'SearchOrchestrator',
    'DetailOrchestrator',
    'classify',
    'is_searchable',
    'MIN_QUERY_LENGTH',
    'ContentKind',
    'ContentSummary',
    'ContentDetail',
    'DetailKey',
    'DetailRequestState',
    'RequestStatus',
    'SearchBuckets',
    'SearchOutcome',
    'SearchStatus',
    'OmdbError',
    'TransportError',
    'ParseError',
    'ApiLogicalError',
    'OmdbConfigError',
]

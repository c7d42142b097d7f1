"""
================================================================================
Raz - OMDb Content Models
================================================================================
Typed views over the OMDb JSON payloads.

  - ContentSummary:     one row of a search page (s=...)
  - ContentDetail:      the full record (i=...)
  - SearchOutcome:      results / no results / failure for one committed query
  - DetailRequestState: idle / loading / success / failure for one detail key

OMDb sends every scalar as a string ("1994", "8.9", "N/A"), so the models
keep strings and only derive numbers where display code needs them.
================================================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import ParseError
from .fields import is_valid_field, split_people


# =============================================================================
# ENUMS
# =============================================================================

class ContentKind(str, Enum):
    """Content kinds exchanged with the OMDb ``type`` parameter."""
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"

    @classmethod
    def parse(cls, value: str) -> "ContentKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown content kind: {value!r}") from None


class SearchStatus(str, Enum):
    RESULTS = "results"
    NO_RESULTS = "no_results"
    FAILURE = "failure"


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


def _text(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


# =============================================================================
# CONTENT RECORDS
# =============================================================================

@dataclass(frozen=True)
class ContentSummary:
    """
    One catalog entry as returned in a search page.

    Identity is ``external_id`` (the IMDb id). ``kind`` is a ContentKind for
    the three known types; any other ``Type`` value is kept verbatim.
    """
    title: str
    year: str
    external_id: str
    kind: Union[ContentKind, str]
    poster_url: Optional[str] = None

    @staticmethod
    def _summary_fields(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise ParseError(f"Expected a JSON object for a record, got {type(payload).__name__}")
        raw_kind = _text(payload, "Type")
        try:
            kind: Union[ContentKind, str] = ContentKind(raw_kind)
        except ValueError:
            kind = raw_kind
        poster = payload.get("Poster")
        return {
            "title": _text(payload, "Title"),
            "year": _text(payload, "Year"),
            "external_id": _text(payload, "imdbID"),
            "kind": kind,
            "poster_url": poster if is_valid_field(poster) else None,
        }

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "ContentSummary":
        return cls(**cls._summary_fields(payload))

    @property
    def kind_value(self) -> str:
        return self.kind.value if isinstance(self.kind, ContentKind) else self.kind

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "year": self.year,
            "external_id": self.external_id,
            "kind": self.kind_value,
            "poster_url": self.poster_url,
        }


@dataclass(frozen=True)
class Rating:
    source: str
    value: str


@dataclass(frozen=True)
class ContentDetail(ContentSummary):
    """
    Full OMDb record. Any field may hold the literal "N/A"; use
    ``is_valid_field`` (or ``valid_fields()``) before displaying one.
    """
    rated: str = ""
    released: str = ""
    runtime: str = ""
    genre: str = ""
    director: str = ""
    writer: str = ""
    actors: str = ""
    plot: str = ""
    language: str = ""
    country: str = ""
    awards: str = ""
    ratings: Tuple[Rating, ...] = ()
    metascore: str = ""
    imdb_rating: str = ""
    imdb_votes: str = ""
    dvd: str = ""
    box_office: str = ""
    production: str = ""
    website: str = ""

    # OMDb key -> attribute name, for the extended string fields
    API_FIELDS = (
        ("Rated", "rated"),
        ("Released", "released"),
        ("Runtime", "runtime"),
        ("Genre", "genre"),
        ("Director", "director"),
        ("Writer", "writer"),
        ("Actors", "actors"),
        ("Plot", "plot"),
        ("Language", "language"),
        ("Country", "country"),
        ("Awards", "awards"),
        ("Metascore", "metascore"),
        ("imdbRating", "imdb_rating"),
        ("imdbVotes", "imdb_votes"),
        ("DVD", "dvd"),
        ("BoxOffice", "box_office"),
        ("Production", "production"),
        ("Website", "website"),
    )

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "ContentDetail":
        values = cls._summary_fields(payload)
        for api_key, attr in cls.API_FIELDS:
            values[attr] = _text(payload, api_key)
        values["ratings"] = tuple(
            Rating(source=_text(item, "Source"), value=_text(item, "Value"))
            for item in payload.get("Ratings") or []
            if isinstance(item, dict)
        )
        return cls(**values)

    # =========================================================================
    # DISPLAY HELPERS
    # =========================================================================

    @property
    def directors(self) -> List[str]:
        return split_people(self.director)

    @property
    def writers(self) -> List[str]:
        return split_people(self.writer)

    @property
    def cast(self) -> List[str]:
        return split_people(self.actors)

    @property
    def rating_out_of_ten(self) -> Optional[float]:
        """IMDb rating as a number, or None when OMDb has none."""
        if not is_valid_field(self.imdb_rating):
            return None
        try:
            return float(self.imdb_rating)
        except ValueError:
            return None

    @property
    def awards_summary(self) -> Optional[str]:
        """Awards line as displayed: OMDb's text minus its trailing period."""
        if not is_valid_field(self.awards) or not self.awards:
            return None
        return self.awards[:-1]

    def valid_fields(self) -> Dict[str, str]:
        """Extended string fields that carry real data, keyed by attribute."""
        result = {}
        for _, attr in self.API_FIELDS:
            value = getattr(self, attr)
            if value and is_valid_field(value):
                result[attr] = value
        return result

    def to_dict(self) -> dict:
        data = super().to_dict()
        for _, attr in self.API_FIELDS:
            data[attr] = getattr(self, attr)
        data["ratings"] = [{"source": r.source, "value": r.value} for r in self.ratings]
        data["directors"] = self.directors
        data["writers"] = self.writers
        data["rating_out_of_ten"] = self.rating_out_of_ten
        data["awards_summary"] = self.awards_summary
        return data


# =============================================================================
# SEARCH OUTCOME
# =============================================================================

@dataclass(frozen=True)
class SearchBuckets:
    """Search rows partitioned by kind; each bucket keeps the API's order."""
    movies: Tuple[ContentSummary, ...] = ()
    serieses: Tuple[ContentSummary, ...] = ()
    episodes: Tuple[ContentSummary, ...] = ()

    def __len__(self) -> int:
        return len(self.movies) + len(self.serieses) + len(self.episodes)

    def to_dict(self) -> dict:
        return {
            "movies": [item.to_dict() for item in self.movies],
            "serieses": [item.to_dict() for item in self.serieses],
            "episodes": [item.to_dict() for item in self.episodes],
        }


@dataclass(frozen=True)
class SearchOutcome:
    """
    Result of one committed query. Exactly one of the three statuses applies:

      RESULTS     total_count + buckets
      NO_RESULTS  OMDb answered Response "False" (api_message keeps its text)
      FAILURE     transport or parse failure (failure + failure_code)
    """
    query: str
    status: SearchStatus
    total_count: int = 0
    buckets: SearchBuckets = field(default_factory=SearchBuckets)
    api_message: Optional[str] = None
    failure: Optional[str] = None
    failure_code: Optional[str] = None

    @classmethod
    def results(cls, query: str, total_count: int, buckets: SearchBuckets) -> "SearchOutcome":
        return cls(query=query, status=SearchStatus.RESULTS,
                   total_count=total_count, buckets=buckets)

    @classmethod
    def empty(cls, query: str, api_message: Optional[str] = None) -> "SearchOutcome":
        return cls(query=query, status=SearchStatus.NO_RESULTS, api_message=api_message)

    @classmethod
    def failed(cls, query: str, reason: str, code: str) -> "SearchOutcome":
        return cls(query=query, status=SearchStatus.FAILURE,
                   failure=reason, failure_code=code)

    @property
    def no_results(self) -> bool:
        return self.status == SearchStatus.NO_RESULTS

    @property
    def is_failure(self) -> bool:
        return self.status == SearchStatus.FAILURE

    @property
    def message(self) -> str:
        """Status line shown above the result lists."""
        if self.status == SearchStatus.RESULTS:
            return f"{self.total_count} results for: {self.query}"
        if self.status == SearchStatus.NO_RESULTS:
            return "No results"
        return self.failure or "Search failed"

    def to_dict(self) -> dict:
        data = {
            "query": self.query,
            "status": self.status.value,
            "message": self.message,
        }
        if self.status == SearchStatus.RESULTS:
            data["total_count"] = self.total_count
            data["buckets"] = self.buckets.to_dict()
        elif self.status == SearchStatus.NO_RESULTS:
            data["no_results"] = True
            data["api_message"] = self.api_message
        else:
            data["error"] = self.failure
            data["code"] = self.failure_code
        return data


# =============================================================================
# DETAIL REQUEST STATE
# =============================================================================

@dataclass(frozen=True)
class DetailKey:
    kind: ContentKind
    external_id: str

    # ASCII unit separator; never present in a searchable query
    KEY_SEPARATOR = "\x1f"

    @property
    def cache_key(self) -> str:
        return f"{self.kind.value}{self.KEY_SEPARATOR}{self.external_id}"

    def __str__(self) -> str:
        return f"/{self.kind.value}/{self.external_id}"


@dataclass(frozen=True)
class DetailRequestState:
    """Observed state of a detail view. ``key`` is None only while idle."""
    status: RequestStatus
    key: Optional[DetailKey] = None
    detail: Optional[ContentDetail] = None
    reason: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def idle(cls) -> "DetailRequestState":
        return cls(status=RequestStatus.IDLE)

    @classmethod
    def loading(cls, key: DetailKey) -> "DetailRequestState":
        return cls(status=RequestStatus.LOADING, key=key)

    @classmethod
    def success(cls, key: DetailKey, detail: ContentDetail) -> "DetailRequestState":
        return cls(status=RequestStatus.SUCCESS, key=key, detail=detail)

    @classmethod
    def failure(cls, key: DetailKey, reason: str, code: str) -> "DetailRequestState":
        return cls(status=RequestStatus.FAILURE, key=key, reason=reason, code=code)

    @property
    def is_loading(self) -> bool:
        return self.status == RequestStatus.LOADING

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"status": self.status.value}
        if self.key is not None:
            data["kind"] = self.key.kind.value
            data["external_id"] = self.key.external_id
        if self.detail is not None:
            data["detail"] = self.detail.to_dict()
        if self.status == RequestStatus.FAILURE:
            data["error"] = self.reason
            data["code"] = self.code
        return data

import asyncio

import pytest


BATMAN_PAGE = {
    "Search": [
        {"Title": "Batman Begins", "Year": "2005", "imdbID": "tt0372784", "Type": "movie",
         "Poster": "https://m.media-amazon.com/images/M/batman-begins.jpg"},
        {"Title": "The Batman", "Year": "2022", "imdbID": "tt1877830", "Type": "movie",
         "Poster": "N/A"},
        {"Title": "Batman: The Animated Series", "Year": "1992–1995", "imdbID": "tt0103359",
         "Type": "series", "Poster": "https://m.media-amazon.com/images/M/btas.jpg"},
    ],
    "totalResults": "3",
    "Response": "True",
}

NOT_FOUND_PAGE = {"Response": "False", "Error": "Movie not found!"}

BATMAN_BEGINS = {
    "Title": "Batman Begins",
    "Year": "2005",
    "Rated": "PG-13",
    "Released": "15 Jun 2005",
    "Runtime": "140 min",
    "Genre": "Action, Crime, Drama",
    "Director": "Christopher Nolan",
    "Writer": "Bob Kane (characters), David S. Goyer (story), Christopher Nolan (screenplay)",
    "Actors": "Christian Bale, Michael Caine, Ken Watanabe",
    "Plot": "After witnessing his parents' death, Bruce learns the art of fighting.",
    "Language": "English, Mandarin",
    "Country": "United States, United Kingdom",
    "Awards": "Nominated for 1 Oscar. 14 wins & 79 nominations total.",
    "Poster": "https://m.media-amazon.com/images/M/batman-begins.jpg",
    "Ratings": [
        {"Source": "Internet Movie Database", "Value": "8.2/10"},
        {"Source": "Rotten Tomatoes", "Value": "85%"},
    ],
    "Metascore": "70",
    "imdbRating": "8.2",
    "imdbVotes": "1,555,042",
    "imdbID": "tt0372784",
    "Type": "movie",
    "DVD": "18 Oct 2005",
    "BoxOffice": "$206,863,479",
    "Production": "N/A",
    "Website": "N/A",
    "Response": "True",
}

BTAS = {
    "Title": "Batman: The Animated Series",
    "Year": "1992–1995",
    "Rated": "TV-PG",
    "Runtime": "23 min",
    "Genre": "Animation, Action, Adventure",
    "Director": "N/A",
    "Writer": "Bob Kane, Bill Finger",
    "Awards": "Won 4 Primetime Emmys. 8 wins & 21 nominations total.",
    "imdbRating": "9.0",
    "imdbID": "tt0103359",
    "Type": "series",
    "Response": "True",
}

INCORRECT_ID = {"Response": "False", "Error": "Incorrect IMDb ID."}


class GatedClient:
    """
    Stand-in for OmdbClient with canned answers.

    ``hold(key)`` makes calls for that key (query or IMDb id) wait until
    ``release(key)``, so tests can choose which response lands first.
    A canned answer that is an exception instance is raised.
    """

    def __init__(self, search_pages=None, details=None):
        self.search_pages = dict(search_pages or {})
        self.details = dict(details or {})
        self.calls = []
        self._held = set()
        self._gates = {}

    def _gate(self, key):
        if key not in self._gates:
            self._gates[key] = asyncio.Event()
        return self._gates[key]

    def hold(self, key):
        self._held.add(key)

    def release(self, key):
        self._gate(key).set()

    async def _answer(self, key, answers):
        if key in self._held:
            await self._gate(key).wait()
        answer = answers[key]
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def search(self, query):
        self.calls.append(("search", query))
        return await self._answer(query, self.search_pages)

    async def fetch_detail(self, external_id, kind):
        self.calls.append(("detail", external_id, getattr(kind, "value", kind)))
        return await self._answer(external_id, self.details)


@pytest.fixture
def gated_client():
    def build(search_pages=None, details=None):
        return GatedClient(search_pages, details)
    return build


@pytest.fixture(scope="session")
def batman_page():
    return BATMAN_PAGE


@pytest.fixture(scope="session")
def batman_begins():
    return BATMAN_BEGINS


@pytest.fixture(scope="session")
def not_found_page():
    return NOT_FOUND_PAGE


@pytest.fixture(scope="session")
def btas():
    return BTAS


@pytest.fixture(scope="session")
def incorrect_id():
    return INCORRECT_ID

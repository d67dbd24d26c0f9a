import datetime
import math

from store.partition import ACTOR_PREFIX, DEFAULT_PARTITION_COUNT, MOVIE_PREFIX, get_partition_key
from app.core.exceptions import MalformedIdentifierError

MIN_YEAR = 1874
MAX_YEAR = datetime.datetime.now().year + 5
RATING_MIN = 0.0
RATING_MAX = 10.0
TOP_RATED_THRESHOLD = 8.5


class InvalidDocumentError(Exception):
    pass


def normalize_entity_id(id, prefix):
    if not id or not isinstance(id, str):
        raise InvalidDocumentError("missing id")

    id = id.strip().lower()
    if not id.startswith(prefix):
        raise InvalidDocumentError(f"id must start with {prefix}")

    try:
        get_partition_key(id)
    except MalformedIdentifierError:
        raise InvalidDocumentError(f"malformed id {id}")

    return id


def normalize_year(year, required=True):
    if year is None or year == "":
        if not required:
            return None
        raise InvalidDocumentError("missing year")

    if isinstance(year, bool):
        raise InvalidDocumentError("year is not int")

    if isinstance(year, float):
        if math.isnan(year):
            raise InvalidDocumentError("missing year")
        if year.is_integer():
            year = int(year)
        else:
            raise InvalidDocumentError("year is not int")

    if isinstance(year, str):
        year = year.strip()
        if not year or not (year.isascii() and year.isdigit()):
            raise InvalidDocumentError("found character in numbers")
        if len(year) > 4:
            raise InvalidDocumentError("year out of bounds")
        year = int(year)

    if not isinstance(year, int):
        raise InvalidDocumentError("year is not int")

    if MIN_YEAR <= year <= MAX_YEAR:
        return year
    raise InvalidDocumentError("year out of bounds")


def normalize_string_list(values, name, lower=True):
    if values is None:
        return []

    if not isinstance(values, (str, list)):
        raise InvalidDocumentError(f"{name} is not None, string or list")

    if isinstance(values, str):
        values = values.split(",")

    for value in values:
        if not isinstance(value, str):
            raise InvalidDocumentError(f"found non string in {name}")

    values = [v.strip() for v in values]
    if lower:
        values = [v.lower() for v in values]

    # drop blanks and duplicates, keep order
    return list(dict.fromkeys(v for v in values if v))


class Movie:
    """
    A Movie always has a well formed tt id, a non-empty title, a year in range
    and a rating in 0..10. Genres and cast are normalized lists; textSearch and
    partitionKey are derived here so the store never has to compute them.
    """
    def __init__(self, id, title, year, rating, genres, cast, top_rated=None):
        self.id = Movie.normalize_id(id)
        self.title = Movie.normalize_title(title)
        self.year = normalize_year(year)
        self.rating = Movie.normalize_rating(rating)
        self.genres = normalize_string_list(genres, "genres")
        self.cast = [normalize_entity_id(a, ACTOR_PREFIX) for a in normalize_string_list(cast, "cast")]
        self.top_rated = Movie.normalize_top_rated(top_rated, self.rating)

    @staticmethod
    def normalize_id(id):
        return normalize_entity_id(id, MOVIE_PREFIX)

    @staticmethod
    def normalize_title(title):
        if not title or not isinstance(title, str):
            raise InvalidDocumentError("missing title")

        title = " ".join(title.split())
        if not title:
            raise InvalidDocumentError("missing title")
        return title

    @staticmethod
    def normalize_rating(rating):
        if rating is None or rating == "":
            return 0.0

        if isinstance(rating, bool) or not isinstance(rating, (int, float, str)):
            raise InvalidDocumentError("rating is not float, int or string")

        try:
            rating = float(rating)
        except ValueError:
            raise InvalidDocumentError("rating is not a number")

        if RATING_MIN <= rating <= RATING_MAX:
            return rating
        raise InvalidDocumentError("rating out of bounds")

    @staticmethod
    def normalize_top_rated(top_rated, rating):
        if top_rated is None:
            return rating >= TOP_RATED_THRESHOLD
        if isinstance(top_rated, str):
            return top_rated.strip().lower() in ("true", "1", "yes")
        return bool(top_rated)

    def to_dict(self, partition_count=DEFAULT_PARTITION_COUNT):
        return {
            "id": self.id,
            "partitionKey": get_partition_key(self.id, partition_count),
            "movieId": self.id,
            "type": "Movie",
            "textSearch": self.title.lower(),
            "title": self.title,
            "year": self.year,
            "rating": self.rating,
            "topRated": self.top_rated,
            "genres": self.genres[:],
            "cast": self.cast[:],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(id=data.get("id", data.get("movieId")),
                   title=data.get("title", None),
                   year=data.get("year", None),
                   rating=data.get("rating", None),
                   genres=data.get("genres", None),
                   cast=data.get("cast", None),
                   top_rated=data.get("topRated", None))

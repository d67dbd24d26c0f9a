from dataclasses import dataclass, field
from typing import Any, List, Tuple

MOVIE_FIELDS = (
    "id",
    "partitionKey",
    "movieId",
    "type",
    "textSearch",
    "title",
    "year",
    "rating",
    "topRated",
    "genres",
    "cast",
)

ACTOR_FIELDS = (
    "id",
    "partitionKey",
    "actorId",
    "type",
    "name",
    "birthYear",
    "deathYear",
    "profession",
    "textSearch",
    "movies",
)

MOVIE_ORDER_BY = ("textSearch", "movieId")
ACTOR_ORDER_BY = ("name", "actorId")


def escape_literal(value: str) -> str:
    # a doubled quote is a literal quote inside a SQL string
    return value.replace("'", "''")


def render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    return f"'{escape_literal(str(value))}'"


def normalize_term(term: str | None) -> str:
    if not term:
        return ""
    return term.strip().lower()


class Predicate:
    """
    One clause of a where filter. Every predicate can render itself as SQL
    text and evaluate itself against a raw document, so in-process stores and
    SQL speaking stores see exactly the same filter.
    """

    def render(self) -> str:
        raise NotImplementedError

    def matches(self, doc: dict) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Equals(Predicate):
    field: str
    value: Any

    def render(self) -> str:
        return f"m.{self.field} = {render_value(self.value)}"

    def matches(self, doc: dict) -> bool:
        return doc.get(self.field) == self.value


@dataclass(frozen=True)
class AtLeast(Predicate):
    field: str
    value: float

    def render(self) -> str:
        return f"m.{self.field} >= {render_value(self.value)}"

    def matches(self, doc: dict) -> bool:
        actual = doc.get(self.field)
        if isinstance(actual, bool) or not isinstance(actual, (int, float)):
            return False
        return actual >= self.value


@dataclass(frozen=True)
class Contains(Predicate):
    field: str
    term: str

    def render(self) -> str:
        return f"contains(m.{self.field}, {render_value(self.term)})"

    def matches(self, doc: dict) -> bool:
        actual = doc.get(self.field)
        return isinstance(actual, str) and self.term in actual


@dataclass(frozen=True)
class ArrayContains(Predicate):
    field: str
    value: Any

    def render(self) -> str:
        return f"array_contains(m.{self.field}, {render_value(self.value)})"

    def matches(self, doc: dict) -> bool:
        actual = doc.get(self.field)
        if not isinstance(actual, list):
            return False
        if isinstance(self.value, str):
            return any(isinstance(v, str) and v.lower() == self.value for v in actual)
        return self.value in actual


@dataclass
class Query:
    fields: Tuple[str, ...]
    predicates: List[Predicate] = field(default_factory=list)
    order_by: Tuple[str, ...] = ()
    offset: int | None = None
    limit: int | None = None

    def where(self, predicate: Predicate) -> "Query":
        self.predicates.append(predicate)
        return self

    def matches(self, doc: dict) -> bool:
        return all(p.matches(doc) for p in self.predicates)

    def project(self, doc: dict) -> dict:
        return {f: doc[f] for f in self.fields if f in doc}

    def to_sql(self) -> str:
        sql = "select " + ", ".join(f"m.{f}" for f in self.fields) + " from m"

        if self.predicates:
            sql += " where " + " and ".join(p.render() for p in self.predicates)

        if self.order_by:
            sql += " order by " + ", ".join(f"m.{f}" for f in self.order_by)

        if self.limit is not None:
            sql += f" offset {self.offset or 0} limit {self.limit}"

        return sql

    def __str__(self) -> str:
        return self.to_sql()


def _add_text_search(query: Query, q: str | None) -> None:
    term = normalize_term(q)
    if term:
        query.where(Contains("textSearch", term))


def build_movie_query(
    q: str = "",
    genre: str = "",
    year: int = 0,
    rating: float = 0,
    top_rated: bool = False,
    actor_id: str = "",
    offset: int = 0,
    limit: int = 100,
) -> Query:
    """
    Compose the movie search query. Every parameter left at its default adds
    no clause, so the all-defaults call is the plain ordered movie listing.
    """
    query = Query(MOVIE_FIELDS).where(Equals("type", "Movie"))

    _add_text_search(query, q)

    genre = normalize_term(genre)
    if genre:
        query.where(ArrayContains("genres", genre))

    if year > 0:
        query.where(Equals("year", year))

    if rating > 0:
        query.where(AtLeast("rating", rating))

    if top_rated:
        query.where(Equals("topRated", True))

    actor_id = normalize_term(actor_id)
    if actor_id:
        query.where(ArrayContains("cast", actor_id))

    query.order_by = MOVIE_ORDER_BY
    query.offset = offset
    query.limit = limit
    return query


def build_actor_query(q: str = "", offset: int = 0, limit: int = 100) -> Query:
    query = Query(ACTOR_FIELDS).where(Equals("type", "Actor"))

    _add_text_search(query, q)

    query.order_by = ACTOR_ORDER_BY
    query.offset = offset
    query.limit = limit
    return query


def build_featured_query() -> Query:
    return Query(("movieId",)).where(Equals("type", "Featured"))


def build_genre_query() -> Query:
    return Query(("genre",), order_by=("genre",)).where(Equals("type", "Genre"))

from store.partition import ACTOR_PREFIX, DEFAULT_PARTITION_COUNT, MOVIE_PREFIX, get_partition_key
from models.movie import InvalidDocumentError, normalize_entity_id, normalize_string_list, normalize_year


class Actor:
    """
    An Actor always has a well formed nm id and a non-empty name.
    Birth and death years are optional; a death year before the birth year is rejected.
    """
    def __init__(self, id, name, birth_year, death_year, profession, movies):
        self.id = normalize_entity_id(id, ACTOR_PREFIX)
        self.name = Actor.normalize_name(name)
        self.birth_year = normalize_year(birth_year, required=False)
        self.death_year = normalize_year(death_year, required=False)
        self.profession = normalize_string_list(profession, "profession", lower=False)
        self.movies = [normalize_entity_id(m, MOVIE_PREFIX) for m in normalize_string_list(movies, "movies")]

        if self.birth_year and self.death_year and self.death_year < self.birth_year:
            raise InvalidDocumentError("deathYear before birthYear")

    @staticmethod
    def normalize_name(name):
        if not name or not isinstance(name, str):
            raise InvalidDocumentError("missing name")

        name = " ".join(name.split())
        if not name:
            raise InvalidDocumentError("missing name")
        return name

    def to_dict(self, partition_count=DEFAULT_PARTITION_COUNT):
        return {
            "id": self.id,
            "partitionKey": get_partition_key(self.id, partition_count),
            "actorId": self.id,
            "type": "Actor",
            "name": self.name,
            "birthYear": self.birth_year,
            "deathYear": self.death_year,
            "profession": self.profession[:],
            "textSearch": self.name.lower(),
            "movies": self.movies[:],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(id=data.get("id", data.get("actorId")),
                   name=data.get("name", None),
                   birth_year=data.get("birthYear", None),
                   death_year=data.get("deathYear", None),
                   profession=data.get("profession", None),
                   movies=data.get("movies", None))

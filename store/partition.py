from app.core.exceptions import MalformedIdentifierError

MOVIE_PREFIX = "tt"
ACTOR_PREFIX = "nm"
ID_PREFIXES = (MOVIE_PREFIX, ACTOR_PREFIX)
MIN_ID_LENGTH = 6
MAX_ID_DIGITS = 20
DEFAULT_PARTITION_COUNT = 10


def get_partition_key(entity_id: str, partition_count: int = DEFAULT_PARTITION_COUNT) -> str:
    """
    Derive the partition key for a movie or actor id from the id alone.

    Ids look like tt0133093 / nm0000206: a two letter prefix followed by digits.
    The key is the numeric part modulo the partition count, as a string.
    Raises MalformedIdentifierError when the id doesn't follow that shape.
    """
    if not isinstance(entity_id, str) or len(entity_id) < MIN_ID_LENGTH:
        raise MalformedIdentifierError(details={"id": entity_id})

    prefix, digits = entity_id[:2], entity_id[2:]

    if len(digits) > MAX_ID_DIGITS:
        raise MalformedIdentifierError(details={"id": entity_id[:MIN_ID_LENGTH] + "..."})

    if prefix not in ID_PREFIXES or not (digits.isascii() and digits.isdigit()):
        raise MalformedIdentifierError(details={"id": entity_id})

    return str(int(digits) % partition_count)

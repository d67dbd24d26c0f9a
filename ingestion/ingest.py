from models.movie import Movie, InvalidDocumentError
from models.actor import Actor
from store.partition import DEFAULT_PARTITION_COUNT
import logging
from typing import Optional, Iterable, List
import json

# featured ids and genre names live together in one partition
LOOKUP_PARTITION_KEY = "0"

def _featured_doc(raw: dict) -> dict:
    movie_id = Movie.normalize_id(raw.get("movieId"))
    return {
        "id": raw.get("id") or f"featured-{movie_id}",
        "partitionKey": LOOKUP_PARTITION_KEY,
        "type": "Featured",
        "movieId": movie_id,
    }

def _genre_doc(raw: dict) -> dict:
    genre = raw.get("genre")
    if not genre or not isinstance(genre, str) or not genre.strip():
        raise InvalidDocumentError("missing genre")
    genre = genre.strip()
    return {
        "id": raw.get("id") or genre.lower(),
        "partitionKey": LOOKUP_PARTITION_KEY,
        "type": "Genre",
        "genre": genre,
    }

def ingest_one(raw: dict, partition_count: int = DEFAULT_PARTITION_COUNT) -> Optional[dict]:
    if not isinstance(raw, dict):
        logging.warning("Skipping non-dict record: %r", raw)
        return None

    doc_type = raw.get("type", "Movie")

    try:
        if doc_type == "Movie":
            return Movie.from_dict(raw).to_dict(partition_count)
        if doc_type == "Actor":
            return Actor.from_dict(raw).to_dict(partition_count)
        if doc_type == "Featured":
            return _featured_doc(raw)
        if doc_type == "Genre":
            return _genre_doc(raw)
    except InvalidDocumentError as e:
        logging.warning("Skipping doc id=%s: %s", raw.get('id', "<missing>"), e)
        return None

    logging.warning("Skipping doc id=%s: unknown type %s", raw.get('id', "<missing>"), doc_type)
    return None

def ingest_many(raw_list: Iterable[dict], continue_on_error=True, partition_count: int = DEFAULT_PARTITION_COUNT) -> List[dict]:
    results = []
    ok_count = 0
    skipped_count = 0

    for raw in raw_list:
        result = ingest_one(raw, partition_count)

        if result is None:
            if continue_on_error:
                skipped_count += 1
                continue
            raise InvalidDocumentError("Batch ingestion stopped on an invalid record")

        ok_count += 1
        results.append(result)

    logging.info("Ingested OK=%s SKIP=%s", ok_count, skipped_count)

    return results

def load_json_file(path):
    with open(path, "r", encoding="utf-8") as f:
        first_char = f.read(1)
        f.seek(0)

        # Case 1: JSON array
        if first_char == "[":
            data = json.load(f)

            for item in data:
                if isinstance(item, dict):
                    yield item
                else:
                    logging.warning("Item in JSON file is not a dict!")
                    continue

        # Case 2: NDJSON
        else:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    obj = json.loads(line)
                except json.JSONDecodeError as e:
                    logging.warning(f"Skipping invalid JSON line {lineno}: {e}")
                    continue

                if isinstance(obj, dict):
                    yield obj
                else:
                    logging.warning(f"Line {lineno} is not an object, skipping")

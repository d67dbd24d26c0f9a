import json
import logging
import pytest
from app.api import errors
from app.api.errors import root_cause, to_response
from store.executor import MalformedIdentifier, NotFound, Ok, TransientBackendError, Unexpected


def body(response):
    return json.loads(response.body)


def test_ok_payload():
    response = to_response(Ok({"id": "tt0133093"}), errors.MOVIES, "GetMovieById")
    assert response.status_code == 200
    assert body(response) == {"id": "tt0133093"}

def test_ok_empty_list():
    response = to_response(Ok([]), errors.MOVIES, "GetMovies")
    assert response.status_code == 200
    assert body(response) == []

@pytest.mark.parametrize("outcome", [NotFound("tt0000001"), MalformedIdentifier("junk")])
def test_not_found_and_malformed_look_the_same(outcome):
    response = to_response(outcome, errors.MOVIES, "GetMovieById")
    assert response.status_code == 404
    assert body(response)["error"] == {"code": "NOT_FOUND", "message": "Movie not found", "details": None}

def test_backend_status_is_kept(caplog):
    outcome = TransientBackendError(429, "activity-123", "Request rate is large")

    with caplog.at_level(logging.ERROR):
        response = to_response(outcome, errors.ACTORS, "GetActors:q:nicole")

    assert response.status_code == 429
    assert body(response)["error"]["code"] == "ACTORS_ERROR"
    assert "activity-123" not in response.body.decode()
    assert "GetActors:q:nicole:429:activity-123" in caplog.text

def test_unexpected_is_500_without_internal_text(caplog):
    outcome = Unexpected(RuntimeError("connection string secret=xyz"))

    with caplog.at_level(logging.ERROR):
        response = to_response(outcome, errors.FEATURED, "GetFeaturedMovie")

    assert response.status_code == 500
    assert body(response)["error"]["message"] == errors.FEATURED.message
    assert "secret" not in response.body.decode()
    assert "RuntimeError" in caplog.text

def test_root_cause_of_exception_group(caplog):
    group = ExceptionGroup("many", [ValueError("first"), KeyError("second")])

    with caplog.at_level(logging.ERROR):
        response = to_response(Unexpected(group), errors.MOVIES, "GetMovies")

    assert response.status_code == 500
    assert "Exception|GetMovies|ValueError|first" in caplog.text

def test_root_cause_follows_chain():
    try:
        try:
            raise ConnectionResetError("reset")
        except ConnectionResetError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert isinstance(root_cause(outer), ConnectionResetError)

def test_root_cause_nested_group():
    group = ExceptionGroup("outer", [ExceptionGroup("inner", [OSError("disk")])])
    assert isinstance(root_cause(group), OSError)

def test_root_cause_plain_exception():
    e = ValueError("x")
    assert root_cause(e) is e

def test_unknown_outcome_is_rejected():
    with pytest.raises(TypeError):
        to_response("not an outcome", errors.MOVIES, "GetMovies")  # type: ignore

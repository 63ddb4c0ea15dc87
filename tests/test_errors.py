import pytest
from httpx import AsyncClient as HttpxAsyncClient
from httpx import Client as HttpxClient
from httpx import HTTPStatusError, Request, Response

from algoliasearch_python_sdk.errors import (
    AlgoliaApiError,
    AlgoliaCommunicationError,
    AlgoliaError,
    AlgoliaTimeoutError,
    InvalidBatchOperationError,
    InvalidParameterTypeError,
    NoMoreHitsError,
    SettingsDecodeError,
)


def test_algolia_api_error():
    expected = "test"
    got = AlgoliaApiError(expected, Response(status_code=404))

    assert expected in str(got)
    assert got.status_code == 404


def test_algolia_api_error_message_from_body():
    response = Response(status_code=404, json={"message": "ObjectID does not exist"})
    got = AlgoliaApiError("test", response)

    assert got.message == "ObjectID does not exist"
    assert "404" in str(got)


def test_algolia_communication_error():
    expected = "test"
    got = AlgoliaCommunicationError(expected)

    assert expected in str(got)


def test_algolia_error():
    expected = "test message"
    got = AlgoliaError(expected)

    assert expected in str(got)


def test_algolia_timeout_error():
    got = AlgoliaTimeoutError("Task 12 was not published", task_id=12)

    assert "12" in str(got)
    assert got.task_id == 12


def test_invalid_batch_operation_error():
    got = InvalidBatchOperationError("deleteObject")

    assert got.action == "deleteObject"
    assert "objectID" in str(got)
    assert "deleteObject" in str(got)


def test_invalid_parameter_type_error():
    got = InvalidParameterTypeError("insidePolygon", "string or list[list[float]]")

    assert got.parameter == "insidePolygon"
    assert "insidePolygon" in str(got)


def test_no_more_hits_error():
    assert str(NoMoreHitsError()) == "No more hits"


def test_settings_decode_error():
    got = SettingsDecodeError("distinct", "yes")

    assert got.field == "distinct"
    assert "distinct" in str(got)


def test_non_json_error(index, monkeypatch):
    def mock_post_response(*args, **kwargs):
        return Response(
            status_code=504, text="test", request=Request("POST", url="http://localhost")
        )

    monkeypatch.setattr(HttpxClient, "post", mock_post_response)
    with pytest.raises(HTTPStatusError):
        index.search("alien")


async def test_non_json_error_async(async_index, monkeypatch):
    async def mock_post_response(*args, **kwargs):
        return Response(
            status_code=504, text="test", request=Request("POST", url="http://localhost")
        )

    monkeypatch.setattr(HttpxAsyncClient, "post", mock_post_response)
    with pytest.raises(HTTPStatusError):
        await async_index.search("alien")


def test_api_error_for_missing_object(index_with_movies):
    with pytest.raises(AlgoliaApiError) as e:
        index_with_movies.get_object("unknown")

    assert e.value.status_code == 404
    assert "ObjectID does not exist" in str(e.value)

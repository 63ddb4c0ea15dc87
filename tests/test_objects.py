import pytest

from algoliasearch_python_sdk.errors import InvalidObjectError
from algoliasearch_python_sdk.models.objects import (
    Add,
    AddUnique,
    BatchOperation,
    Decrement,
    Increment,
    Remove,
    Replace,
    apply_partial_update,
    decode_operation,
    encode_body,
    object_id_of,
)


@pytest.mark.parametrize(
    "operation, expected",
    (
        (Increment(2), {"_operation": "Increment", "value": 2}),
        (Decrement(1), {"_operation": "Decrement", "value": 1}),
        (Add("scifi"), {"_operation": "Add", "value": "scifi"}),
        (Remove("scifi"), {"_operation": "Remove", "value": "scifi"}),
        (AddUnique("scifi"), {"_operation": "AddUnique", "value": "scifi"}),
        (Replace("Alien"), "Alien"),
    ),
)
def test_operation_to_wire(operation, expected):
    assert operation.to_wire() == expected


def test_encode_body():
    body = {"objectID": "1", "views": Increment(1), "tags": AddUnique("new"), "title": "Alien"}

    assert encode_body(body) == {
        "objectID": "1",
        "views": {"_operation": "Increment", "value": 1},
        "tags": {"_operation": "AddUnique", "value": "new"},
        "title": "Alien",
    }


def test_decode_operation():
    assert decode_operation({"_operation": "Increment", "value": 3}) == Increment(3)
    assert decode_operation("plain") == Replace("plain")
    assert decode_operation(AddUnique("x")) == AddUnique("x")


def test_decode_operation_unknown():
    with pytest.raises(InvalidObjectError):
        decode_operation({"_operation": "Multiply", "value": 3})


def test_increment_and_decrement():
    obj = {"objectID": "1", "views": 10}
    got = apply_partial_update(obj, {"views": Increment(5)})
    got = apply_partial_update(got, {"views": Decrement(2), "likes": Increment(1)})

    assert got == {"objectID": "1", "views": 13, "likes": 1}


def test_decrement_absent_attribute():
    got = apply_partial_update({"objectID": "1"}, {"stock": Decrement(3)})

    assert got["stock"] == -3


def test_add_creates_list():
    got = apply_partial_update({"objectID": "1"}, {"tags": Add("scifi")})

    assert got["tags"] == ["scifi"]


def test_add_keeps_duplicates():
    got = apply_partial_update({"objectID": "1", "tags": ["scifi"]}, {"tags": Add("scifi")})

    assert got["tags"] == ["scifi", "scifi"]


def test_add_unique():
    obj = {"objectID": "1", "tags": ["scifi"]}
    got = apply_partial_update(obj, {"tags": AddUnique("scifi")})
    got = apply_partial_update(got, {"tags": AddUnique("horror")})

    assert got["tags"] == ["scifi", "horror"]


@pytest.mark.parametrize(
    "operation, expected",
    ((Add("scifi"), ["horror", "scifi"]), (AddUnique("scifi"), ["horror", "scifi"])),
)
def test_add_to_scalar_attribute(operation, expected):
    got = apply_partial_update({"objectID": "1", "tags": "horror"}, {"tags": operation})

    assert got["tags"] == expected


def test_add_unique_to_equal_scalar_attribute():
    got = apply_partial_update({"objectID": "1", "tags": "scifi"}, {"tags": AddUnique("scifi")})

    assert got["tags"] == ["scifi"]


def test_remove_all_matches():
    obj = {"objectID": "1", "tags": ["scifi", "horror", "scifi"]}
    got = apply_partial_update(obj, {"tags": Remove("scifi")})

    assert got["tags"] == ["horror"]


def test_remove_absent_value():
    got = apply_partial_update({"objectID": "1", "tags": ["horror"]}, {"tags": Remove("scifi")})

    assert got["tags"] == ["horror"]


def test_wire_encoded_update():
    obj = {"objectID": "1", "views": 1}
    update = {"objectID": "1", "views": {"_operation": "Increment", "value": 1}, "title": "Heat"}

    assert apply_partial_update(obj, update) == {"objectID": "1", "views": 2, "title": "Heat"}


def test_apply_partial_update_does_not_change_input():
    obj = {"objectID": "1", "tags": ["scifi"]}
    apply_partial_update(obj, {"tags": Add("horror")})

    assert obj == {"objectID": "1", "tags": ["scifi"]}


@pytest.mark.parametrize("obj", ({"title": "Alien"}, {"objectID": "", "title": "Alien"}))
def test_object_id_of_missing(obj):
    with pytest.raises(InvalidObjectError):
        object_id_of(obj)


def test_object_id_of_number():
    assert object_id_of({"objectID": 42}) == "42"


def test_batch_operation_to_wire():
    operation = BatchOperation(
        action="partialUpdateObject",
        body={"objectID": "1", "views": Increment(1)},
        index_name="movies",
    )

    assert operation.to_wire() == {
        "action": "partialUpdateObject",
        "body": {"objectID": "1", "views": {"_operation": "Increment", "value": 1}},
        "indexName": "movies",
    }


@pytest.mark.parametrize(
    "action, expected",
    (
        ("addObject", False),
        ("updateObject", True),
        ("partialUpdateObject", True),
        ("partialUpdateObjectNoCreate", True),
        ("deleteObject", True),
        ("delete", False),
        ("clear", False),
    ),
)
def test_requires_object_id(action, expected):
    assert BatchOperation(action=action).requires_object_id() is expected

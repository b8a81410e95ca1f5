"""User Routes — end-to-end behaviour over HTTP.

Invariants verified:
    - POST → 201 + Location + id body; GET on Location returns fullName
    - HEAD → 200 with JSON content type and no body; 404 when unknown
    - PUT unknown id → 201 at that id; known id → 204
    - PATCH unknown id → 404; invalid patch → 422; bad document → 400
    - DELETE → 204, repeated → 404
    - GET list → body is a plain array, metadata in X-Pagination
    - OPTIONS → Allow header
"""

import json
from uuid import uuid4

import pytest

PATCH_HEADERS = {"Content-Type": "application/json-patch+json"}


# ─── create / get ────────────────────────────────────────────────

async def test_create_returns_201_with_location(client):
    res = await client.post(
        "/api/users",
        json={"login": "johndoe375", "firstName": "John", "lastName": "Doe"},
    )
    assert res.status_code == 201
    user_id = res.json()
    assert res.headers["location"] == f"http://test/api/users/{user_id}"

    got = await client.get(res.headers["location"])
    assert got.status_code == 200
    assert got.json() == {
        "id": user_id, "login": "johndoe375", "fullName": "Doe John",
    }


async def test_create_uses_placeholder_names(client):
    res = await client.post("/api/users", json={"login": "alice"})
    got = await client.get(f"/api/users/{res.json()}")
    assert got.json()["fullName"] == "Doe John"


async def test_create_with_trailing_newline_in_login_is_422(client):
    res = await client.post("/api/users", json={"login": "johndoe\n"})
    assert res.status_code == 422
    assert res.json()["error"]["details"][0]["type"] == "invalid_login"


async def test_create_with_space_in_login_is_422(client):
    res = await client.post("/api/users", json={"login": "john doe"})
    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert error["details"][0]["field"] == "login"


async def test_create_without_body_is_400(client):
    res = await client.post("/api/users")
    assert res.status_code == 400


async def test_create_with_invalid_json_is_400(client):
    res = await client.post(
        "/api/users", content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MALFORMED_REQUEST"


async def test_create_with_array_body_is_400(client):
    res = await client.post("/api/users", json=[{"login": "a"}])
    assert res.status_code == 400


async def test_get_unknown_is_404(client):
    res = await client.get(f"/api/users/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_unparsable_id_is_404(client):
    res = await client.get("/api/users/trash")
    assert res.status_code == 404


async def test_head_returns_headers_only(client, created_user_id):
    res = await client.head(f"/api/users/{created_user_id}")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/json; charset=utf-8"
    assert res.content == b""


async def test_head_unknown_is_404(client):
    res = await client.head(f"/api/users/{uuid4()}")
    assert res.status_code == 404


# ─── replace ─────────────────────────────────────────────────────

async def test_put_unknown_id_creates_at_that_id(client):
    uid = str(uuid4())
    res = await client.put(f"/api/users/{uid}", json={"login": "jd", "firstName": "J"})
    assert res.status_code == 201
    assert res.json() == uid
    assert res.headers["location"].endswith(f"/api/users/{uid}")


async def test_put_known_id_is_204_and_replaces(client, created_user_id):
    res = await client.put(f"/api/users/{created_user_id}", json={"login": "renamed"})
    assert res.status_code == 204
    assert res.content == b""
    got = await client.get(f"/api/users/{created_user_id}")
    assert got.json()["login"] == "renamed"
    assert got.json()["fullName"] == " "


async def test_put_twice_is_idempotent(client):
    uid = str(uuid4())
    payload = {"login": "jd", "firstName": "J", "lastName": "D"}
    assert (await client.put(f"/api/users/{uid}", json=payload)).status_code == 201
    before = (await client.get(f"/api/users/{uid}")).json()
    assert (await client.put(f"/api/users/{uid}", json=payload)).status_code == 204
    assert (await client.get(f"/api/users/{uid}")).json() == before


async def test_put_unparsable_id_is_400(client):
    res = await client.put("/api/users/trash", json={"login": "jd"})
    assert res.status_code == 400


async def test_put_without_body_is_400(client):
    res = await client.put(f"/api/users/{uuid4()}")
    assert res.status_code == 400


async def test_put_without_login_is_422(client):
    res = await client.put(f"/api/users/{uuid4()}", json={"firstName": "J"})
    assert res.status_code == 422


# ─── patch ───────────────────────────────────────────────────────

async def test_patch_known_id_is_204(client, created_user_id):
    res = await client.patch(
        f"/api/users/{created_user_id}",
        content=json.dumps([{"op": "replace", "path": "/firstName", "value": "Jane"}]),
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 204
    got = await client.get(f"/api/users/{created_user_id}")
    assert got.json()["fullName"] == "Doe Jane"


async def test_patch_unknown_id_is_404_and_creates_nothing(client, repository):
    uid = uuid4()
    res = await client.patch(
        f"/api/users/{uid}",
        content=json.dumps([{"op": "replace", "path": "/login", "value": "jd"}]),
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 404
    assert repository.find_by_id(uid) is None


async def test_patch_unparsable_id_is_404(client):
    res = await client.patch("/api/users/trash", content="[]", headers=PATCH_HEADERS)
    assert res.status_code == 404


async def test_patch_without_document_is_400(client, created_user_id):
    res = await client.patch(f"/api/users/{created_user_id}", headers=PATCH_HEADERS)
    assert res.status_code == 400


async def test_patch_with_object_document_is_400(client, created_user_id):
    res = await client.patch(
        f"/api/users/{created_user_id}",
        content=json.dumps({"op": "replace"}),
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 400


async def test_patch_removing_login_is_422(client, created_user_id):
    res = await client.patch(
        f"/api/users/{created_user_id}",
        content=json.dumps([{"op": "remove", "path": "/login"}]),
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 422
    got = await client.get(f"/api/users/{created_user_id}")
    assert got.json()["login"] == "johndoe375"


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_delete_again(client, created_user_id):
    first = await client.delete(f"/api/users/{created_user_id}")
    assert first.status_code == 204
    second = await client.delete(f"/api/users/{created_user_id}")
    assert second.status_code == 404


async def test_delete_never_inserted_is_404(client):
    assert (await client.delete(f"/api/users/{uuid4()}")).status_code == 404
    assert (await client.delete("/api/users/trash")).status_code == 404


# ─── list ────────────────────────────────────────────────────────

async def _seed(client, count):
    for i in range(count):
        res = await client.post("/api/users", json={"login": f"user{i}"})
        assert res.status_code == 201


async def test_list_second_page_with_links(client):
    await _seed(client, 25)
    res = await client.get("/api/users", params={"pageNumber": 2, "pageSize": 10})
    assert res.status_code == 200
    assert [u["login"] for u in res.json()] == [f"user{i}" for i in range(10, 20)]
    meta = json.loads(res.headers["x-pagination"])
    assert meta["totalCount"] == 25
    assert meta["totalPages"] == 3
    assert meta["currentPage"] == 2
    assert meta["pageSize"] == 10
    assert meta["previousPageLink"] == "http://test/api/users?pageNumber=1&pageSize=10"
    assert meta["nextPageLink"] == "http://test/api/users?pageNumber=3&pageSize=10"


async def test_list_defaults(client):
    await _seed(client, 3)
    res = await client.get("/api/users")
    meta = json.loads(res.headers["x-pagination"])
    assert meta["currentPage"] == 1
    assert meta["pageSize"] == 10
    assert meta["previousPageLink"] is None
    assert meta["nextPageLink"] is None
    assert len(res.json()) == 3


@pytest.mark.parametrize("params, page, size", [
    ({"pageSize": 0}, 1, 1),
    ({"pageSize": 50}, 1, 20),
    ({"pageNumber": 0}, 1, 10),
    ({"pageNumber": -5}, 1, 10),
])
async def test_list_clamps_paging(client, params, page, size):
    res = await client.get("/api/users", params=params)
    assert res.status_code == 200
    meta = json.loads(res.headers["x-pagination"])
    assert (meta["currentPage"], meta["pageSize"]) == (page, size)


async def test_list_page_beyond_end_is_empty(client):
    await _seed(client, 2)
    res = await client.get("/api/users", params={"pageNumber": 5})
    assert res.status_code == 200
    assert res.json() == []


async def test_list_huge_page_number_is_empty(client):
    await _seed(client, 2)
    res = await client.get(
        "/api/users", params={"pageNumber": "10000000000000000000"},
    )
    assert res.status_code == 200
    assert res.json() == []


@pytest.mark.parametrize("params, page, size", [
    ({"pageNumber": "two"}, 1, 10),
    ({"pageSize": "abc"}, 1, 10),
    ({"pageNumber": "1.5", "pageSize": ""}, 1, 10),
])
async def test_list_non_integer_paging_falls_back_to_defaults(
    client, params, page, size,
):
    res = await client.get("/api/users", params=params)
    assert res.status_code == 200
    meta = json.loads(res.headers["x-pagination"])
    assert (meta["currentPage"], meta["pageSize"]) == (page, size)


# ─── options ─────────────────────────────────────────────────────

async def test_options_lists_allowed_methods(client):
    res = await client.options("/api/users")
    assert res.status_code == 200
    assert res.headers["allow"] == "POST, GET, OPTIONS"

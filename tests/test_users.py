"""
User GraphQL tests — create, read, list, update and delete through the
``/graphql`` endpoint, including the coded errors for duplicate user
names, stale versions and invalid input.
"""
import pytest

USER_FIELDS = """
    id username firstName secondName middleName displayName
    userRoleName userRole { name } version
"""

CREATE_USER = f"""
mutation CreateUser($data: UserCreateInput!) {{
  userCreate(data: $data) {{ {USER_FIELDS} }}
}}
"""

UPDATE_USER = f"""
mutation UpdateUser($data: UserUpdateInput!) {{
  userUpdate(data: $data) {{ {USER_FIELDS} }}
}}
"""

DELETE_USER = """
mutation DeleteUser($data: UserDeleteInput!) {
  userDelete(data: $data)
}
"""

GET_USER = f"""
query GetUser($id: Int!) {{
  user(id: $id) {{ {USER_FIELDS} }}
}}
"""


def _user_input(username: str, **overrides) -> dict:
    data = {
        "username": username,
        "password": "secret-password",
        "firstName": "Ivan",
        "secondName": "Ivanov",
        "middleName": "Ivanovich",
    }
    data.update(overrides)
    return data


async def _create_user(graphql, username: str, **overrides) -> dict:
    body = await graphql(CREATE_USER, {"data": _user_input(username, **overrides)})
    assert "errors" not in body, body
    return body["data"]["userCreate"]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user(graphql):
    """Creating a user derives the display name and assigns the default role."""
    user = await _create_user(graphql, "ivanov")
    assert user["username"] == "ivanov"
    assert user["displayName"] == "Ivanov Ivan Ivanovich"
    assert user["userRoleName"] == "user"
    assert user["userRole"] == {"name": "user"}
    assert user["version"] == 0
    assert int(user["id"]) > 0


@pytest.mark.asyncio
async def test_create_user_without_middle_name(graphql):
    user = await _create_user(graphql, "petrov", secondName="Petrov", firstName="Petr", middleName=None)
    assert user["middleName"] is None
    assert user["displayName"] == "Petrov Petr"


@pytest.mark.asyncio
async def test_create_user_with_explicit_role(graphql):
    user = await _create_user(graphql, "boss", userRoleName="admin")
    assert user["userRole"] == {"name": "admin"}


@pytest.mark.asyncio
async def test_create_user_duplicate_username(graphql):
    """A second user with the same name is rejected with a message code."""
    await _create_user(graphql, "dup")
    body = await graphql(CREATE_USER, {"data": _user_input("dup")})
    assert body["data"] is None
    error = body["errors"][0]
    assert error["message"] == "User name is already taken"
    assert error["extensions"]["code"] == "user:validate:notUniqueUserName"


@pytest.mark.asyncio
async def test_create_user_short_password_is_invalid_input(graphql):
    body = await graphql(CREATE_USER, {"data": _user_input("shorty", password="123")})
    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "request:validate:invalidInput"


@pytest.mark.asyncio
async def test_create_user_password_over_72_bytes_is_invalid_input(graphql):
    """40 characters, but 80 bytes once encoded: more than bcrypt accepts."""
    body = await graphql(CREATE_USER, {"data": _user_input("unicode", password="é" * 40)})
    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "request:validate:invalidInput"

    body = await graphql(CREATE_USER, {"data": _user_input("unicode", password="é" * 36)})
    assert "errors" not in body, body


@pytest.mark.asyncio
async def test_update_user_password_over_72_bytes_is_invalid_input(graphql):
    user = await _create_user(graphql, "reunicode")
    body = await graphql(UPDATE_USER, {"data": {
        "id": int(user["id"]),
        "version": 0,
        "username": "reunicode",
        "firstName": "Ivan",
        "secondName": "Ivanov",
        "password": "ж" * 40,
    }})
    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "request:validate:invalidInput"


@pytest.mark.asyncio
async def test_user_password_hash_is_not_exposed(graphql, async_client):
    user = await _create_user(graphql, "hidden")
    resp = await async_client.post("/graphql", json={
        "query": "query($id: Int!) { user(id: $id) { passwordHash } }",
        "variables": {"id": int(user["id"])},
    })
    assert "errors" in resp.json()


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_user(graphql):
    created = await _create_user(graphql, "reader")
    body = await graphql(GET_USER, {"id": int(created["id"])})
    assert body["data"]["user"] == created


@pytest.mark.asyncio
async def test_get_user_not_found(graphql):
    body = await graphql(GET_USER, {"id": 99999})
    assert "errors" not in body
    assert body["data"]["user"] is None


@pytest.mark.asyncio
async def test_user_list_filter_and_order(graphql):
    """The text filter matches the start of any word, case-insensitively."""
    await _create_user(graphql, "u1", secondName="Ivanov", firstName="Sergey", middleName=None)
    await _create_user(graphql, "u2", secondName="Petrov", firstName="Ivan", middleName=None)
    await _create_user(graphql, "u3", secondName="Ostrovsky", firstName="Oleg", middleName=None)

    body = await graphql(
        'query { userList(textFilter: "iv") { displayName } }'
    )
    names = [u["displayName"] for u in body["data"]["userList"]]
    assert names == ["Ivanov Sergey", "Petrov Ivan"]

    body = await graphql("query { userList { displayName } }")
    names = [u["displayName"] for u in body["data"]["userList"]]
    assert names == ["Ivanov Sergey", "Ostrovsky Oleg", "Petrov Ivan"]


@pytest.mark.asyncio
async def test_user_list_pagination(graphql):
    for i in range(5):
        await _create_user(graphql, f"page{i}", secondName=f"Name{i}", middleName=None)

    body = await graphql("query { userList(page: 2, paging: 2) { username } }")
    assert [u["username"] for u in body["data"]["userList"]] == ["page2", "page3"]

    body = await graphql("query { userList(page: 3, paging: 2) { username } }")
    assert [u["username"] for u in body["data"]["userList"]] == ["page4"]


@pytest.mark.asyncio
async def test_users_find_by_ids_or_usernames(graphql):
    a = await _create_user(graphql, "alpha")
    await _create_user(graphql, "bravo")
    await _create_user(graphql, "charlie")

    body = await graphql(
        "query($ids: [Int!], $names: [String!]) {"
        " usersFind(ids: $ids, usernames: $names) { username } }",
        {"ids": [int(a["id"])], "names": ["charlie"]},
    )
    assert sorted(u["username"] for u in body["data"]["usersFind"]) == ["alpha", "charlie"]


@pytest.mark.asyncio
async def test_users_find_without_criteria_returns_nothing(graphql):
    await _create_user(graphql, "alone")
    body = await graphql("query { usersFind { username } }")
    assert body["data"]["usersFind"] == []


@pytest.mark.asyncio
async def test_user_role_list(graphql):
    body = await graphql("query { userRoleList { name description } }")
    assert [r["name"] for r in body["data"]["userRoleList"]] == ["admin", "user"]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_user_bumps_version(graphql):
    user = await _create_user(graphql, "editable")
    body = await graphql(UPDATE_USER, {"data": {
        "id": int(user["id"]),
        "version": user["version"],
        "username": "edited",
        "firstName": "Anna",
        "secondName": "Smirnova",
    }})
    assert "errors" not in body, body
    updated = body["data"]["userUpdate"]
    assert updated["username"] == "edited"
    assert updated["displayName"] == "Smirnova Anna"
    assert updated["version"] == user["version"] + 1
    # Role is kept when omitted.
    assert updated["userRoleName"] == "user"


@pytest.mark.asyncio
async def test_update_user_stale_version(graphql):
    """Re-using a version that was already consumed is a conflict."""
    user = await _create_user(graphql, "racer")
    data = {
        "id": int(user["id"]),
        "version": user["version"],
        "username": "racer",
        "firstName": "First",
        "secondName": "Write",
    }
    first = await graphql(UPDATE_USER, {"data": data})
    assert "errors" not in first

    second = await graphql(UPDATE_USER, {"data": {**data, "secondName": "Second"}})
    assert second["data"] is None
    error = second["errors"][0]
    assert error["message"] == "Entity was modified by another request"
    assert error["extensions"]["code"] == "request:version:conflict"

    current = await graphql(GET_USER, {"id": int(user["id"])})
    assert current["data"]["user"]["secondName"] == "Write"


@pytest.mark.asyncio
async def test_update_missing_user_is_not_found(graphql):
    body = await graphql(UPDATE_USER, {"data": {
        "id": 4242,
        "version": 0,
        "username": "ghost",
        "firstName": "G",
        "secondName": "Host",
    }})
    assert body["errors"][0]["extensions"]["code"] == "request:entity:notFound"


@pytest.mark.asyncio
async def test_update_user_to_taken_username(graphql):
    await _create_user(graphql, "taken")
    other = await _create_user(graphql, "other")
    body = await graphql(UPDATE_USER, {"data": {
        "id": int(other["id"]),
        "version": other["version"],
        "username": "taken",
        "firstName": "Ivan",
        "secondName": "Ivanov",
    }})
    assert body["errors"][0]["extensions"]["code"] == "user:validate:notUniqueUserName"


@pytest.mark.asyncio
async def test_update_user_keeping_own_username(graphql):
    user = await _create_user(graphql, "same")
    body = await graphql(UPDATE_USER, {"data": {
        "id": int(user["id"]),
        "version": 0,
        "username": "same",
        "firstName": "Ivan",
        "secondName": "Ivanov",
        "password": "another-secret",
    }})
    assert "errors" not in body, body
    assert body["data"]["userUpdate"]["version"] == 1


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_user(graphql):
    user = await _create_user(graphql, "doomed")
    body = await graphql(DELETE_USER, {"data": {"id": int(user["id"]), "version": 0}})
    assert body["data"]["userDelete"] == 1

    after = await graphql(GET_USER, {"id": int(user["id"])})
    assert after["data"]["user"] is None


@pytest.mark.asyncio
async def test_delete_user_stale_version_keeps_row(graphql):
    user = await _create_user(graphql, "survivor")
    body = await graphql(DELETE_USER, {"data": {"id": int(user["id"]), "version": 7}})
    assert body["errors"][0]["extensions"]["code"] == "request:version:conflict"

    after = await graphql(GET_USER, {"id": int(user["id"])})
    assert after["data"]["user"]["username"] == "survivor"


@pytest.mark.asyncio
async def test_delete_missing_user(graphql):
    body = await graphql(DELETE_USER, {"data": {"id": 555, "version": 0}})
    assert body["errors"][0]["extensions"]["code"] == "request:entity:notFound"

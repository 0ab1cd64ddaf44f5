"""
Integration tests веб-интерфейса: список → форма → редирект/ошибка.
"""

import pytest


FIRST_ID = 1  # каждая проверка начинается с пустой БД


async def create_role(client, name):
    return await client.post("/roles/create", data={"name": name})


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_root_redirects_to_persons(client):
    response = await client.get("/")

    assert response.status_code == 303
    assert response.headers["location"] == "/persons"


@pytest.mark.asyncio
async def test_roles_page_create_mode(client):
    """Тест: без ID — пустая форма создания."""
    response = await client.get("/roles")

    assert response.status_code == 200
    assert "Create Role" in response.text
    assert 'action="/roles/create"' in response.text
    assert "No records yet." in response.text


@pytest.mark.asyncio
async def test_create_role_redirects_with_flash(client):
    """Тест: успешное создание → 303 и однократное сообщение об успехе."""
    response = await create_role(client, "Admin")

    assert response.status_code == 303
    assert response.headers["location"] == "/roles"

    page = await client.get("/roles")
    assert "was created" in page.text
    assert "Admin" in page.text

    again = await client.get("/roles")
    assert "was created" not in again.text


@pytest.mark.asyncio
async def test_create_role_empty_name(client):
    """Тест: пустое имя → 400, сообщение об ошибке, запись не создана."""
    response = await create_role(client, "")

    assert response.status_code == 400
    assert "Role Name must not be empty." in response.text
    assert "No records yet." in response.text


@pytest.mark.asyncio
async def test_create_duplicate_role_keeps_input(client):
    await create_role(client, "Admin")

    response = await create_role(client, "Admin")

    assert response.status_code == 400
    assert "already exists" in response.text
    assert 'value="Admin"' in response.text


@pytest.mark.asyncio
async def test_edit_mode_and_update(client):
    """Тест: ?id=N открывает форму изменения; изменение сохраняется."""
    await create_role(client, "Admin")
    rid = FIRST_ID

    page = await client.get(f"/roles?id={rid}")
    assert "Update Role" in page.text
    assert 'action="/roles/update"' in page.text
    assert f'name="id" value="{rid}"' in page.text

    response = await client.post("/roles/update", data={"id": str(rid), "name": "Administrator"})
    assert response.status_code == 303

    page = await client.get("/roles")
    assert "was updated" in page.text
    assert "Administrator" in page.text


@pytest.mark.asyncio
async def test_edit_missing_record_falls_back_to_create(client):
    response = await client.get("/roles?id=404")

    assert response.status_code == 400
    assert "Role with id 404 was not found." in response.text
    assert 'action="/roles/create"' in response.text


@pytest.mark.asyncio
async def test_delete_role_in_use(client):
    """Тест: удаление назначенной роли → 400 с именами людей; форма в режиме создания."""
    await create_role(client, "Admin")
    rid = FIRST_ID
    await client.post("/persons/create", data={"first_name": "Ivan", "last_name": "Petrov", "role_ids": str(rid)})

    response = await client.post("/roles/delete", data={"id": str(rid)})

    assert response.status_code == 400
    assert "assigned to: Ivan Petrov." in response.text
    assert 'action="/roles/create"' in response.text


@pytest.mark.asyncio
async def test_delete_role(client):
    await create_role(client, "Guest")
    rid = FIRST_ID

    response = await client.post("/roles/delete", data={"id": str(rid)})

    assert response.status_code == 303
    page = await client.get("/roles")
    assert "was deleted" in page.text
    assert "No records yet." in page.text


@pytest.mark.asyncio
async def test_person_page_lists_roles_as_checkboxes(client):
    await create_role(client, "Admin")

    response = await client.get("/persons")

    assert response.status_code == 200
    assert 'name="role_ids"' in response.text
    assert "Admin" in response.text


@pytest.mark.asyncio
async def test_person_create_and_delete_mentions_roles(client):
    await create_role(client, "Admin")
    rid = FIRST_ID

    response = await client.post(
        "/persons/create",
        data={"first_name": "Ivan", "middle_name": "", "last_name": "Petrov", "role_ids": str(rid)},
    )
    assert response.status_code == 303

    page = await client.get("/persons")
    assert "Ivan Petrov" in page.text

    response = await client.post("/persons/delete", data={"id": "1"})
    assert response.status_code == 303
    page = await client.get("/persons")
    assert "Affected roles: Admin." in page.text


@pytest.mark.asyncio
async def test_person_missing_names(client):
    response = await client.post("/persons/create", data={"first_name": "", "last_name": ""})

    assert response.status_code == 400
    assert "First Name must not be empty." in response.text
    assert "Last Name must not be empty." in response.text


@pytest.mark.asyncio
async def test_user_password_never_rendered(client):
    """Тест: поле пароля в форме изменения всегда пустое."""
    response = await client.post("/users/create", data={"username": "admin", "password": "secret"})
    assert response.status_code == 303

    page = await client.get("/users?id=1")
    assert 'name="password" value=""' in page.text
    assert "Leave empty to keep the current password." in page.text

    response = await client.post("/users/update", data={"id": "1", "username": "root", "password": ""})
    assert response.status_code == 303


@pytest.mark.asyncio
async def test_user_create_requires_password(client):
    response = await client.post("/users/create", data={"username": "admin", "password": ""})

    assert response.status_code == 400
    assert "Password must not be empty." in response.text


@pytest.mark.asyncio
async def test_language_parameter_sets_cookie(client):
    """Тест: ?language=ru переключает язык и запоминается в cookie."""
    response = await client.get("/roles?language=ru")

    assert response.status_code == 200
    assert "Новая роль" in response.text
    assert response.cookies.get("localeCookie") == "ru"

    # следующий запрос без параметра — язык из cookie
    page = await client.get("/roles")
    assert "Новая роль" in page.text


@pytest.mark.asyncio
async def test_unknown_language_falls_back_to_default(client):
    response = await client.get("/roles?language=de")

    assert "Create Role" in response.text


@pytest.mark.asyncio
async def test_delete_malformed_id(client):
    """Тест: некорректный ID при удалении → NotFound с исходным значением."""
    response = await client.post("/roles/delete", data={"id": "abc"})

    assert response.status_code == 400
    assert "Role with id abc was not found." in response.text


@pytest.mark.asyncio
async def test_user_create_with_posted_id_requires_password(client):
    """Тест: ID в форме создания не снимает обязательность пароля."""
    response = await client.post("/users/create", data={"id": "7", "username": "mallory", "password": ""})

    assert response.status_code == 400
    assert "Password must not be empty." in response.text
    assert 'action="/users/create"' in response.text
    assert "No records yet." in response.text


@pytest.mark.asyncio
async def test_person_update_with_vanished_role_stays_in_edit_mode(client):
    """Тест: роль исчезла во время изменения → форма изменения с введёнными данными."""
    await client.post("/persons/create", data={"first_name": "Ivan", "last_name": "Petrov"})

    response = await client.post(
        "/persons/update",
        data={"id": "1", "first_name": "Changed", "last_name": "Petrov", "role_ids": "99"},
    )

    assert response.status_code == 400
    assert "Role with id 99 no longer exists." in response.text
    assert 'action="/persons/update"' in response.text
    assert 'value="Changed"' in response.text


@pytest.mark.asyncio
async def test_role_update_duplicate_stays_in_edit_mode(client):
    """Тест: переименование в занятое имя → 400, форма изменения сохраняет ввод."""
    await create_role(client, "Admin")
    await create_role(client, "Guest")

    response = await client.post("/roles/update", data={"id": "2", "name": "Admin"})

    assert response.status_code == 400
    assert "already exists" in response.text
    assert 'action="/roles/update"' in response.text
    assert 'name="id" value="2"' in response.text
    assert 'name="name" value="Admin"' in response.text


@pytest.mark.asyncio
async def test_role_update_flash_lists_affected_persons(client):
    await create_role(client, "Admin")
    await client.post("/persons/create", data={"first_name": "Ivan", "last_name": "Petrov", "role_ids": "1"})

    response = await client.post("/roles/update", data={"id": "1", "name": "Administrator"})
    assert response.status_code == 303

    page = await client.get("/roles")
    assert "was updated" in page.text
    assert "Affected persons: Ivan Petrov." in page.text


@pytest.mark.asyncio
async def test_update_malformed_id(client):
    """Тест: некорректный ID при изменении → NotFound без "None" в сообщении."""
    response = await client.post("/roles/update", data={"id": "abc", "name": "X"})

    assert response.status_code == 400
    assert "Role with id  was not found." in response.text
    assert "id None" not in response.text

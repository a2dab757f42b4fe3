def mount(client, headers=None):
    r = client.post("/screens/profile", headers=headers or {})
    assert r.status_code == 201, r.text
    return r.json()


def test_root_and_health(client):
    assert client.get("/").json()["service"] == "profile-screen"
    assert client.get("/health").json() == {"status": "healthy"}


def test_mount_without_token_redirects_to_entry(client):
    state = mount(client)

    assert state["route"] == "/"
    assert state["loading"] is False
    assert state["notices"] == []


def test_new_user_starts_with_placeholder(client, auth_header):
    state = mount(client, auth_header)

    assert state["route"] is None
    assert state["committed_name"] == ""
    assert state["heading"] == "Set your name"
    assert state["edit_state"] == "viewing"
    assert state["notices"] == []


def test_edit_and_save_display_name(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]
    base = f"/screens/profile/{screen_id}"

    r = client.post(f"{base}/edit", headers=auth_header)
    assert r.json()["edit_state"] == "editing"

    r = client.put(f"{base}/draft", headers=auth_header, json={"text": "  Alice "})
    assert r.json()["draft_name"] == "  Alice "

    r = client.post(f"{base}/save", headers=auth_header)
    state = r.json()
    assert state["committed_name"] == "Alice"
    assert state["edit_state"] == "viewing"
    assert state["notices"][0]["kind"] == "success"
    assert state["notices"][0]["message"] == "Username updated successfully"

    r = client.post(f"{base}/notices/ack", headers=auth_header)
    assert r.json()["notices"] == []

    # a fresh mount reads the saved name back
    assert mount(client, auth_header)["heading"] == "Alice"


def test_blank_draft_is_rejected(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]
    base = f"/screens/profile/{screen_id}"
    client.post(f"{base}/edit", headers=auth_header)
    client.put(f"{base}/draft", headers=auth_header, json={"text": "   "})

    state = client.post(f"{base}/save", headers=auth_header).json()

    assert state["edit_state"] == "editing"
    assert state["notices"][0]["title"] == "Error"
    assert state["notices"][0]["message"] == "Username cannot be empty"


def test_logout_cancel_and_confirm(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]
    base = f"/screens/profile/{screen_id}"

    assert client.post(f"{base}/logout", headers=auth_header).json()["logout_state"] == "confirming"
    state = client.post(f"{base}/logout/cancel", headers=auth_header).json()
    assert state["logout_state"] == "idle"
    assert state["route"] is None

    client.post(f"{base}/logout", headers=auth_header)
    state = client.post(f"{base}/logout/confirm", headers=auth_header).json()
    assert state["logout_state"] == "idle"
    assert state["route"] == "/"


def test_back_goes_to_dashboard(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]

    state = client.post(f"/screens/profile/{screen_id}/back", headers=auth_header).json()

    assert state["route"] == "/dashboard"


def test_screen_is_private_to_its_token(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]

    r = client.get(f"/screens/profile/{screen_id}", headers={"Authorization": "Bearer someone-else"})
    assert r.status_code == 404

    assert client.get(f"/screens/profile/{screen_id}", headers=auth_header).status_code == 200


def test_unmount(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]

    assert client.delete(f"/screens/profile/{screen_id}", headers=auth_header).status_code == 204
    assert client.get(f"/screens/profile/{screen_id}", headers=auth_header).status_code == 404
    assert client.delete(f"/screens/profile/{screen_id}", headers=auth_header).status_code == 404


def test_long_display_name_is_accepted(client, auth_header):
    screen_id = mount(client, auth_header)["screen_id"]
    base = f"/screens/profile/{screen_id}"
    long_name = "A" * 101
    client.post(f"{base}/edit", headers=auth_header)

    r = client.put(f"{base}/draft", headers=auth_header, json={"text": long_name})
    assert r.status_code == 200, r.text

    state = client.post(f"{base}/save", headers=auth_header).json()
    assert state["committed_name"] == long_name
    assert state["edit_state"] == "viewing"


def test_signed_out_mounts_do_not_accumulate(client):
    from profilescreen.infrastructure.api.dependencies import get_screen_registry

    registry = get_screen_registry()
    before = len(registry)

    for _ in range(50):
        assert mount(client)["route"] == "/"

    assert len(registry) == before


def test_logout_releases_screen(client, auth_header):
    from profilescreen.infrastructure.api.dependencies import get_screen_registry

    registry = get_screen_registry()
    screen_id = mount(client, auth_header)["screen_id"]
    before = len(registry)
    base = f"/screens/profile/{screen_id}"

    client.post(f"{base}/logout", headers=auth_header)
    state = client.post(f"{base}/logout/confirm", headers=auth_header).json()

    assert state["route"] == "/"
    assert len(registry) == before - 1
    assert client.get(base, headers=auth_header).status_code == 404


def test_screen_routes_run_on_the_event_loop():
    import asyncio

    from profilescreen.infrastructure.api.routes.profile_routes import router

    assert router.routes
    for route in router.routes:
        assert asyncio.iscoroutinefunction(route.endpoint), route.name

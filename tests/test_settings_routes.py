import pytest
from fasthtml.common import fast_app
from starlette.testclient import TestClient

from settings_core.option_store import MemoryOptionStore
from settings_core.settings import Settings
from settings_ui.routes.settings import setup_settings_routes


@pytest.fixture
def store():
    return MemoryOptionStore()


@pytest.fixture
def client(store):
    def _factory():
        settings = Settings("site", "site", {"page_title": "Site settings"}, store=store)
        settings.add_section("main", "Main")
        settings.add_field("name", "main", "text", "Site name", default="My site")
        settings.add_field("public", "main", "toggle", "Public")
        return settings

    app, _rt = fast_app(pico=False)
    setup_settings_routes(app, _factory)
    return TestClient(app)


def test_get_renders_full_page(client):
    response = client.get("/settings")
    assert response.status_code == 200
    assert "Site settings" in response.text
    assert 'value="My site"' in response.text


def test_post_form_persists_between_requests(client, store):
    response = client.post(
        "/settings/save",
        data={"site[name]": "Renamed", "site[public]": ["0", "1"]},
        headers={"HX-Request": "true"},
    )
    assert response.status_code == 200
    assert "Settings saved." in response.text
    assert store.get("site") == {"name": "Renamed", "public": True}

    assert 'value="Renamed"' in client.get("/settings").text


def test_post_json_body(client, store):
    response = client.post("/settings/save", json={"site": {"name": "From JSON"}})
    assert response.status_code == 200
    assert store.get("site")["name"] == "From JSON"


def test_demo_app_health_and_tabs(monkeypatch):
    """The demo app renders every tab of the bundled page."""
    import settings_app

    store = MemoryOptionStore()
    monkeypatch.setattr(settings_app, "default_option_store", lambda: store)
    client = TestClient(settings_app.app)

    health = client.get("/health")
    assert health.json() == {"status": "ok", "version": settings_app.__version__}

    for tab, marker in (("inputs", "demo_textarea"), ("choices", "demo_buttongroup"), ("advanced", "demo_code_html")):
        response = client.get(f"/settings?tab={tab}")
        assert response.status_code == 200
        assert marker in response.text

    advanced = client.get("/settings?tab=advanced").text
    assert 'data-conditional="demo_contact_method"' in advanced
    assert "<strong>HTML</strong>" in advanced


def test_authorize_hook_denies_with_no_permission_label(store):
    def _factory():
        settings = Settings("site", "site", {"labels": {"no_permission": "Admins only."}}, store=store)
        settings.add_section("main", "Main").add_field("name", "main", "text", "Site name")
        return settings

    app, _rt = fast_app(pico=False)
    setup_settings_routes(app, _factory, authorize=lambda request: request.headers.get("x-role") == "admin")
    client = TestClient(app)

    denied = client.get("/settings")
    assert denied.status_code == 403
    assert denied.text == "Admins only."

    rejected = client.post("/settings/save", data={"site[name]": "Hijacked"})
    assert rejected.status_code == 403
    assert store.get("site") is None

    allowed = client.post("/settings/save", data={"site[name]": "Mine"}, headers={"x-role": "admin"})
    assert allowed.status_code == 200
    assert store.get("site") == {"name": "Mine"}

"""
Test fixtures: an app per test backed by an in-memory DuckDB, explicit test
settings and a fake Gemini client.
"""

import pytest
from fastapi.testclient import TestClient

from cafe_menu.app import create_app
from cafe_menu.config.settings import load_settings
from cafe_menu.core.exceptions import ServiceUnavailableError
from cafe_menu.models.admin import AdminIdentity

TEST_SECRET = "test-secret-key-with-at-least-32-bytes"
ADMIN_EMAIL = "a@b.com"
ADMIN_PASSWORD = "secret1"


class FakeGeminiClient:
    """Records prompts and returns a canned reply"""

    def __init__(self, reply: str = "پیشنهاد من اسپرسو است."):
        self.reply = reply
        self.calls = []
        self.fail = False

    def generate(self, parts):
        self.calls.append(parts)
        if self.fail:
            raise ServiceUnavailableError("پاسخ هوش مصنوعی قابل دریافت نیست.")
        return self.reply


@pytest.fixture
def settings_overrides(tmp_path):
    return {
        "jwt_secret": TEST_SECRET,
        "database_url": "duckdb://:memory:",
        "upload_dir": str(tmp_path / "uploads"),
        "gemini_api_key": None,
        "app_env": "development",
        "_env_file": None,
    }


@pytest.fixture
def test_settings(settings_overrides):
    return load_settings(**settings_overrides)


@pytest.fixture
def fake_gemini():
    return FakeGeminiClient()


@pytest.fixture
def app_instance(test_settings, fake_gemini):
    app = create_app(test_settings, assistant_client=fake_gemini)
    yield app
    app.state.db.close()


@pytest.fixture
def client(app_instance):
    return TestClient(app_instance)


@pytest.fixture
def seeded_admin(app_instance):
    return app_instance.state.auth_service.seed_admin(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def admin_client(client, seeded_admin):
    """Client holding a valid admin cookie"""
    response = client.post(
        "/api/v1/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_identity(seeded_admin):
    return AdminIdentity(admin_id=seeded_admin.id, email=seeded_admin.email)


@pytest.fixture
def catalog(app_instance):
    return app_instance.state.catalog_service


@pytest.fixture
def db(app_instance):
    return app_instance.state.db

"""
Admin seeding command tests
"""

from cafe_menu.cli import seed_admin
from cafe_menu.config.settings import load_settings
from cafe_menu.core.database import DatabaseManager
from cafe_menu.core.security import verify_password
from cafe_menu.services.auth_service import AuthService

from .conftest import TEST_SECRET


class TestSeedAdmin:

    def _env(self, monkeypatch, tmp_path):
        db_path = tmp_path / "seed.duckdb"
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
        monkeypatch.setenv("DATABASE_URL", f"duckdb://{db_path}")
        monkeypatch.delenv("ADMIN_EMAIL", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
        return db_path

    def _admin(self, email):
        db = DatabaseManager(load_settings(_env_file=None))
        try:
            return AuthService(db).get_admin_by_email(email)
        finally:
            db.close()

    def test_seed_from_arguments(self, monkeypatch, tmp_path, capsys):
        self._env(monkeypatch, tmp_path)

        assert seed_admin(["--email", "owner@cafe.ir", "--password", "secret1"]) == 0

        admin = self._admin("owner@cafe.ir")
        assert admin is not None
        assert verify_password("secret1", admin.password_hash)
        assert "owner@cafe.ir" in capsys.readouterr().out

    def test_reseed_resets_password(self, monkeypatch, tmp_path):
        self._env(monkeypatch, tmp_path)
        seed_admin(["--email", "owner@cafe.ir", "--password", "secret1"])
        first = self._admin("owner@cafe.ir")

        monkeypatch.setenv("ADMIN_EMAIL", "owner@cafe.ir")
        monkeypatch.setenv("ADMIN_PASSWORD", "secret2")
        assert seed_admin([]) == 0

        second = self._admin("owner@cafe.ir")
        assert second.id == first.id
        assert verify_password("secret2", second.password_hash)
        assert not verify_password("secret1", second.password_hash)

    def test_missing_credentials(self, monkeypatch, tmp_path, capsys):
        self._env(monkeypatch, tmp_path)
        assert seed_admin([]) == 1
        assert "ADMIN_EMAIL" in capsys.readouterr().err

    def test_missing_secret(self, monkeypatch, tmp_path):
        self._env(monkeypatch, tmp_path)
        monkeypatch.delenv("JWT_SECRET")
        assert seed_admin(["--email", "owner@cafe.ir", "--password", "secret1"]) == 1

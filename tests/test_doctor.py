import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from adapters.http_client import build_async_client
from cli import doctor
from tests.conftest import PRIVATE_KEY, PUBLIC_KEY

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(doctor, "_console", Console(width=200))


def _patch_api(monkeypatch, body: dict, status: int = 200) -> None:
    def fake_client(settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(status, json=body))
        return build_async_client(settings, transport=transport)

    monkeypatch.setattr(doctor, "build_async_client", fake_client)


class TestDoctorRun:
    def test_reports_missing_keys(self, monkeypatch):
        monkeypatch.setenv("MARVEL_KEY", "")
        monkeypatch.setenv("MARVEL_SECRET_KEY", "")

        result = runner.invoke(doctor.app, ["run"])

        assert result.exit_code == 1
        assert "MISSING" in result.output
        assert "setup-keys" in result.output

    def test_authenticated_request_ok(self, monkeypatch):
        monkeypatch.setenv("MARVEL_KEY", PUBLIC_KEY)
        monkeypatch.setenv("MARVEL_SECRET_KEY", PRIVATE_KEY)
        _patch_api(monkeypatch, {"code": 200, "status": "Ok", "data": {"results": []}})

        result = runner.invoke(doctor.app, ["run"])

        assert result.exit_code == 0, result.output
        assert "Authenticated request OK" in result.output

    def test_rejected_credentials(self, monkeypatch):
        monkeypatch.setenv("MARVEL_KEY", PUBLIC_KEY)
        monkeypatch.setenv("MARVEL_SECRET_KEY", PRIVATE_KEY)
        _patch_api(monkeypatch, {"code": "InvalidCredentials", "message": "bad hash"}, status=401)

        result = runner.invoke(doctor.app, ["run"])

        assert result.exit_code == 1
        assert "InvalidCredentials" in result.output

    def test_invalid_configuration(self, monkeypatch):
        monkeypatch.setenv("MARVEL_HTTP_TIMEOUT_SECONDS", "abc")

        result = runner.invoke(doctor.app, ["run"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestSetupKeys:
    def test_stores_both_keys(self, monkeypatch, tmp_path):
        saved: dict[str, str] = {}

        def fake_write(values):
            saved.update(values)
            return tmp_path / ".env"

        monkeypatch.setattr(doctor, "write_user_env_vars", fake_write)

        result = runner.invoke(doctor.app, ["setup-keys"], input="pub\npriv\n")

        assert result.exit_code == 0, result.output
        assert saved == {"MARVEL_KEY": "pub", "MARVEL_SECRET_KEY": "priv"}

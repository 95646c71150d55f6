from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recipe_proxy import cli, main
from recipe_proxy.config import ConfigurationError, DeploymentMode
from recipe_proxy.main import create_app, run_local

from conftest import make_settings


def test_healthz(client):
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_index_page_is_served(client, settings, tmp_path):
    (tmp_path / "index.html").write_text("<h1>Recipes</h1>")

    resp = client.get("/")

    assert resp.status_code == 200
    assert "<h1>Recipes</h1>" in resp.text


def test_missing_index_page_is_404(client):
    resp = client.get("/")

    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Not found."}}


def test_static_assets_are_served_but_dotfiles_are_not(client, tmp_path):
    (tmp_path / "style.css").write_text("body { margin: 0; }")
    (tmp_path / ".env").write_text("GEMINI_API_KEY=secret")

    assert client.get("/style.css").text == "body { margin: 0; }"
    resp = client.get("/.env")
    assert resp.status_code == 404
    assert "secret" not in resp.text


def test_hosted_app_without_key_starts_and_fails_calls(tmp_path):
    app = create_app(make_settings(gemini_api_key=None, static_dir=str(tmp_path)))
    client = TestClient(app)

    assert client.get("/healthz").status_code == 200
    resp = client.post("/api/generateRecipe", json={"prompt": "risotto"})
    assert resp.status_code == 500
    assert resp.json() == {"error": {"message": "Failed to generate content. Check server logs."}}


@pytest.fixture
def uvicorn_run(monkeypatch):
    run = MagicMock()
    monkeypatch.setattr(main.uvicorn, "run", run)
    return run


def test_run_local_refuses_without_key(uvicorn_run):
    settings = make_settings(deployment_mode=DeploymentMode.LOCAL, gemini_api_key=None)

    with pytest.raises(ConfigurationError):
        run_local(settings)

    uvicorn_run.assert_not_called()


def test_run_local_binds_configured_port(uvicorn_run):
    run_local(make_settings(deployment_mode=DeploymentMode.LOCAL, host="127.0.0.1", port=8099))

    uvicorn_run.assert_called_once()
    assert uvicorn_run.call_args.kwargs["host"] == "127.0.0.1"
    assert uvicorn_run.call_args.kwargs["port"] == 8099


def test_cli_exits_nonzero_without_key(uvicorn_run, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    assert cli.main([]) == 1
    uvicorn_run.assert_not_called()


def test_cli_runs_with_key_and_port_override(uvicorn_run, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    assert cli.main(["--port", "8123"]) == 0
    assert uvicorn_run.call_args.kwargs["port"] == 8123


def test_hosted_entry_point_lives_outside_main():
    from recipe_proxy import asgi

    assert isinstance(asgi.app, FastAPI)
    assert not hasattr(main, "app")


def test_cli_with_key_only_in_dotenv_logs_no_missing_key_warning(uvicorn_run, tmp_path, monkeypatch, caplog):
    (tmp_path / ".env").write_text("GEMINI_API_KEY=key-from-dotenv\n")
    monkeypatch.chdir(tmp_path)
    # load_dotenv writes os.environ directly; registering the variable here restores it afterwards
    monkeypatch.setenv("GEMINI_API_KEY", "placeholder")
    monkeypatch.delenv("GEMINI_API_KEY")

    with caplog.at_level("WARNING"):
        assert cli.main([]) == 0

    assert "GEMINI_API_KEY not found" not in caplog.text
    uvicorn_run.assert_called_once()


def test_cli_rejects_unknown_log_level(uvicorn_run, tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    with caplog.at_level("ERROR"):
        assert cli.main(["--log-level", "bogus"]) == 1

    assert "Invalid configuration" in caplog.text
    uvicorn_run.assert_not_called()


def test_cli_rejects_non_numeric_port(uvicorn_run, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("PORT", "abc")

    assert cli.main([]) == 1
    uvicorn_run.assert_not_called()

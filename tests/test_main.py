import os
import subprocess
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import sldc_tools.app.llm_client as llm_client
import sldc_tools.app.main as main
from sldc_tools.app.config import ConfigError, Settings
from sldc_tools.app.llm_client import GeminiClient


def test_run_exits_before_listening_without_credential(monkeypatch):
    def missing():
        raise ConfigError("GEMINI_API_KEY is not set")

    served = []
    monkeypatch.setattr(main, "load_settings", missing)
    monkeypatch.setattr(main.uvicorn, "run", lambda *a, **kw: served.append((a, kw)))

    with pytest.raises(SystemExit) as exc_info:
        main.run()

    assert exc_info.value.code == 1
    assert served == []


def test_run_serves_on_configured_address(monkeypatch, tmp_path, caplog):
    settings = Settings(gemini_api_key="k", host="0.0.0.0", port=8123, static_dir=str(tmp_path / "none"))
    served = []
    monkeypatch.setattr(main, "load_settings", lambda: settings)
    monkeypatch.setattr(llm_client.genai, "configure", lambda **kw: None)
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kw: served.append((app, kw)))

    main.run()

    (app, kwargs), = served
    assert app.state.settings is settings
    assert kwargs == {"host": "0.0.0.0", "port": 8123, "log_level": "info"}
    assert "Starting server on http://0.0.0.0:8123" in caplog.text


def test_create_app_builds_gemini_client_by_default(monkeypatch, settings):
    monkeypatch.setattr(llm_client.genai, "configure", lambda **kw: None)

    app = main.create_app(settings)

    assert isinstance(app.state.orchestrator._provider, GeminiClient)


def test_static_front_end_is_served_behind_api(tmp_path, provider):
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<h1>SLDC Tools</h1>")
    settings = Settings(gemini_api_key="k", static_dir=str(static))
    client = TestClient(main.create_app(settings, provider))

    page = client.get("/")
    api = client.post("/api/analyze", json={"code": "x"})

    assert page.status_code == 200
    assert "SLDC Tools" in page.text
    assert api.status_code == 200
    assert api.json() == {"result": "Adds two numbers."}


def test_missing_static_dir_disables_front_end(client):
    assert client.get("/").status_code == 404


def _run_in_fresh_interpreter(tmp_path, **env):
    """Call run() in a new process, where logging is not yet configured."""
    repo_root = Path(__file__).resolve().parents[1]
    proc_env = {k: v for k, v in os.environ.items() if k not in {"GEMINI_API_KEY", "LLM_API_KEY", "LOG_LEVEL"}}
    proc_env.update(env)
    proc_env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root), proc_env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-c", "from sldc_tools.app.main import run; run()"],
        cwd=tmp_path,
        env=proc_env,
        capture_output=True,
        text=True,
        timeout=60,
    )


@pytest.mark.parametrize(
    "env, message",
    [
        ({"GEMINI_API_KEY": "k", "LOG_LEVEL": "loud"}, "Invalid configuration"),
        ({}, "GEMINI_API_KEY is not set"),
    ],
    ids=["bad-log-level", "no-credential"],
)
def test_startup_config_errors_exit_cleanly(tmp_path, env, message):
    proc = _run_in_fresh_interpreter(tmp_path, **env)

    assert proc.returncode == 1
    assert message in proc.stderr
    assert "Please create a .env file" in proc.stderr
    assert "Traceback" not in proc.stderr

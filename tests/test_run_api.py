import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / 'scripts' / 'run_api.py'


@pytest.fixture(scope="module")
def run_api():
    spec = importlib.util.spec_from_file_location("run_api", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_defaults(run_api):
    args = run_api.parse_args([])
    assert (args.host, args.port, args.no_reload, args.atomic_stock) == ("0.0.0.0", 8000, False, False)


def test_flags_reach_uvicorn_and_environment(run_api, monkeypatch, tmp_path):
    calls = {}
    monkeypatch.setattr(run_api.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))
    # Recorded so monkeypatch restores them after main() overwrites
    monkeypatch.setenv("STORE_DATA_DIR", "")
    monkeypatch.setenv("STORE_ATOMIC_STOCK_RESERVATION", "")
    monkeypatch.setenv("PYTHONPATH", "")

    run_api.main(["--port", "9001", "--no-reload", "--atomic-stock", "--data-dir", str(tmp_path)])

    assert calls["app"] == "wholesale_store.api.main:app"
    assert calls["port"] == 9001
    assert calls["reload"] is False
    assert run_api.os.environ["STORE_ATOMIC_STOCK_RESERVATION"] == "true"
    assert run_api.os.environ["STORE_DATA_DIR"] == str(tmp_path.resolve())

import importlib.util
from pathlib import Path

import pytest

from storefront.core.security import verify_password

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "hash_admin_password.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("hash_admin_password", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_env_line_with_verifiable_hash(script, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["hash_admin_password.py", "s3cret"])

    script.main()

    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert line.startswith("ADMIN_PASSWORD_HASH=")
    assert verify_password("s3cret", line.split("=", 1)[1])


def test_exits_when_hash_does_not_verify(script, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["hash_admin_password.py", "s3cret"])
    monkeypatch.setattr(script, "verify_password", lambda password, hashed: False)

    with pytest.raises(SystemExit) as exc:
        script.main()

    assert exc.value.code == 1
    assert "ADMIN_PASSWORD_HASH" not in capsys.readouterr().out

"""Tests for configuration loading."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from endor_findings.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, load_config
from endor_findings.errors import ConfigError

ENV = {
    "ENDOR_API_KEY": "key",
    "ENDOR_API_SECRET": "secret",
    "ENDOR_API_NAMESPACE": "acme",
}


def test_load_from_mapping():
    config = load_config(ENV)
    assert config.api_key == "key"
    assert config.api_secret == "secret"
    assert config.namespace == "acme"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == DEFAULT_TIMEOUT


@pytest.mark.parametrize("missing", sorted(ENV))
def test_missing_variable(missing):
    env = dict(ENV)
    env[missing] = ""
    with pytest.raises(ConfigError) as exc_info:
        load_config(env)
    message = str(exc_info.value)
    for name in ENV:
        assert name in message


def test_optional_overrides():
    env = dict(ENV, ENDOR_API_URL="https://api.example.test/v1/", ENDOR_API_TIMEOUT="12.5")
    config = load_config(env)
    assert config.base_url == "https://api.example.test/v1"
    assert config.timeout == 12.5


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_bad_timeout(value):
    with pytest.raises(ConfigError):
        load_config(dict(ENV, ENDOR_API_TIMEOUT=value))


def test_dotenv_file(tmp_path, monkeypatch):
    # registered with monkeypatch so values written by load_dotenv are removed afterwards
    for name in list(ENV) + ["ENDOR_API_URL", "ENDOR_API_TIMEOUT"]:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    env_file = tmp_path / ".env"
    env_file.write_text(
        "ENDOR_API_KEY=file-key\nENDOR_API_SECRET=file-secret\nENDOR_API_NAMESPACE=file-ns\n"
    )

    config = load_config(dotenv_path=str(env_file))
    assert config.api_key == "file-key"
    assert config.namespace == "file-ns"


def test_config_is_frozen():
    config = load_config(ENV)
    with pytest.raises(AttributeError):
        config.api_key = "other"


def test_dotenv_in_working_directory(tmp_path):
    """A script run from a directory holding .env picks it up without a path."""
    (tmp_path / ".env").write_text(
        "ENDOR_API_KEY=cwd-key\nENDOR_API_SECRET=cwd-secret\nENDOR_API_NAMESPACE=cwd-ns\n"
    )
    script = tmp_path / "show_namespace.py"
    script.write_text(
        "from endor_findings.config import load_config\n"
        "print(load_config().namespace)\n"
    )

    env = {k: v for k, v in os.environ.items() if not k.startswith("ENDOR_API_")}
    repo_root = str(Path(__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [repo_root, env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, str(script)],
        cwd=str(tmp_path), env=env, capture_output=True, text=True, timeout=60,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines()[-1] == "cwd-ns"

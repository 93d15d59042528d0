# tests/test_config.py
import json
import os

import aws_cdk as cdk
import pytest

from src.config.load import load_config, substitute_env_vars

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _write(tmp_path, stage, content):
    path = tmp_path / f"{stage}_config.yaml"
    path.write_text(content)
    return path


def test_load_config_uses_stage_from_context(tmp_path):
    _write(tmp_path, "qa", "stackName: date-api-qa\nawsRegion: eu-west-1\n")
    app = cdk.App(context={"stage": "qa"})

    cfg = load_config(app, config_dir=tmp_path)

    assert cfg["stackName"] == "date-api-qa"
    assert cfg["awsRegion"] == "eu-west-1"
    assert cfg["stage"] == "qa"
    assert cfg["tags"] == {}


def test_load_config_falls_back_to_stage_env(tmp_path, monkeypatch):
    monkeypatch.setenv("STAGE", "prod")
    _write(tmp_path, "prod", "stackName: date-api-${STAGE}\ntags:\n  owner: ops\n  cost: 42\n")

    cfg = load_config(cdk.App(), config_dir=tmp_path)

    assert cfg["stackName"] == "date-api-prod"
    assert cfg["tags"] == {"owner": "ops", "cost": "42"}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(cdk.App(context={"stage": "nope"}), config_dir=tmp_path)


def test_load_config_requires_stack_name(tmp_path):
    _write(tmp_path, "dev", "awsRegion: us-east-1\n")

    with pytest.raises(ValueError, match="stackName"):
        load_config(cdk.App(context={"stage": "dev"}), config_dir=tmp_path)


def test_substitute_env_vars_default_and_override(monkeypatch):
    monkeypatch.delenv("DATE_API_REGION", raising=False)
    assert substitute_env_vars("r: ${DATE_API_REGION:us-east-1}") == "r: us-east-1"

    monkeypatch.setenv("DATE_API_REGION", "ap-south-1")
    assert substitute_env_vars("r: ${DATE_API_REGION:us-east-1}") == "r: ap-south-1"


def test_substitute_env_vars_required_but_unset(monkeypatch):
    monkeypatch.delenv("DATE_API_ACCOUNT", raising=False)

    with pytest.raises(ValueError, match="DATE_API_ACCOUNT"):
        substitute_env_vars("account: ${DATE_API_ACCOUNT}")


def test_stage_env_selects_config_under_cdk_json_context(tmp_path, monkeypatch):
    with open(os.path.join(ROOT_DIR, "cdk.json")) as f:
        context = json.load(f).get("context", {})
    monkeypatch.setenv("STAGE", "prod")
    _write(tmp_path, "dev", "stackName: date-api-dev\n")
    _write(tmp_path, "prod", "stackName: date-api-live\n")

    cfg = load_config(cdk.App(context=context), config_dir=tmp_path)

    assert cfg["stage"] == "prod"
    assert cfg["stackName"] == "date-api-live"

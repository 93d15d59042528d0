import os
import re
from pathlib import Path

import yaml

CONFIG_DIR = Path("configs")
REQUIRED_KEYS = ("stackName",)

# Pattern to match ${VAR_NAME} or ${VAR_NAME:default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def load_config(app, config_dir: Path = CONFIG_DIR) -> dict:
    # read stage from cdk context or env var; default 'dev'
    stage = app.node.try_get_context("stage") or os.getenv("STAGE", "dev")
    config_path = Path(config_dir) / f"{stage}_config.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    cfg_content = substitute_env_vars(config_path.read_text())
    cfg = yaml.safe_load(cfg_content) or {}

    missing = [key for key in REQUIRED_KEYS if not cfg.get(key)]
    if missing:
        raise ValueError(f"Config {config_path} is missing required keys: {missing}")

    tags = cfg.get("tags") or {}
    if not isinstance(tags, dict):
        raise ValueError(f"'tags' in {config_path} must be a mapping")
    cfg["tags"] = {str(k): str(v) for k, v in tags.items()}
    cfg["stage"] = stage
    return cfg


def substitute_env_vars(content: str) -> str:
    """
    Substitute environment variables in the format ${VAR_NAME} or ${VAR_NAME:default_value}
    """
    def replace_env_var(match):
        var_expr = match.group(1)
        var_name, sep, default_value = var_expr.partition(":")
        env_value = os.getenv(var_name.strip())
        if env_value is not None:
            return env_value
        if sep:
            return default_value.strip()
        raise ValueError(f"Environment variable '{var_name.strip()}' is required but not set")

    return ENV_VAR_PATTERN.sub(replace_env_var, content)

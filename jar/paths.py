from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "JAR_HOME"
APP_ENV_CAPACITY_CONFIG = "JAR_CAPACITY_CONFIG"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains jar/, api/, cli/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    User-writable home for The Jar.
    Override with JAR_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".the_jar").resolve()


def capacity_config_path() -> Path:
    """
    Capacity threshold overrides (YAML).

    Resolution order:
    1. JAR_CAPACITY_CONFIG env var (explicit override)
    2. $JAR_HOME/config/capacity.yaml if it exists
    3. <project_root>/config/capacity.yaml (shipped defaults)
    """
    if os.environ.get(APP_ENV_CAPACITY_CONFIG):
        return Path(os.environ[APP_ENV_CAPACITY_CONFIG]).expanduser().resolve()
    user_config = app_home() / "config" / "capacity.yaml"
    if user_config.exists():
        return user_config
    return project_root() / "config" / "capacity.yaml"

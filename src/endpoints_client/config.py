"""Configuration management: project config file, precedence resolution, XDG data dir.

* **Project config** -- ``endpoints-client.yaml`` (``.yml`` and ``.json`` are
  accepted too) in the project directory, deserialised into a
  :class:`~endpoints_client.models.ProjectConfig`. See
  :func:`load_project_config` and :func:`save_project_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the project config file and defaults.
* **Data directory** -- :func:`get_data_dir` is where crash logs go,
  XDG compliant on Linux/BSD.

File writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from endpoints_client.exceptions import ConfigError
from endpoints_client.models import ProjectConfig

_APP_NAME = "endpoints-client"
PROJECT_CONFIG_FILENAMES = (
    "endpoints-client.yaml",
    "endpoints-client.yml",
    "endpoints-client.json",
)

ENV_CLIENT_LIB_DIR = "ENDPOINTS_CLIENT_LIB_DIR"
ENV_GEN_SRC_DIR = "ENDPOINTS_CLIENT_GEN_SRC_DIR"
ENV_TOOLS_JAR = "ENDPOINTS_TOOLS_JAR"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/endpoints-client/`` (default
    ``~/.local/share/endpoints-client/``). Elsewhere:
    ``~/.endpoints-client/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to *path* atomically using a temp file in the same directory + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project config ---


def find_project_config(project_dir: Union[str, Path]) -> Optional[Path]:
    """Return the first project config file present in *project_dir*, if any."""
    for name in PROJECT_CONFIG_FILENAMES:
        candidate = Path(project_dir) / name
        if candidate.is_file():
            return candidate
    return None


def load_project_config(project_dir: Union[str, Path]) -> ProjectConfig:
    """Load the project config from *project_dir*.

    Returns:
        The deserialised :class:`~endpoints_client.models.ProjectConfig`,
        or a default instance when no config file exists.

    Raises:
        ConfigError: If the file cannot be parsed or fails validation.
    """
    path = find_project_config(project_dir)
    if path is None:
        return ProjectConfig()
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a mapping")
    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def save_project_config(project_dir: Union[str, Path], config: ProjectConfig) -> Path:
    """Persist *config* atomically as ``endpoints-client.yaml`` in *project_dir*.

    Returns:
        The path written.
    """
    path = Path(project_dir) / PROJECT_CONFIG_FILENAMES[0]
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, yaml.safe_dump(data, sort_keys=False))
    return path


# --- Precedence resolution ---


def resolve_config(
    project_dir: Union[str, Path],
    cli_discovery_docs: Optional[list[str]] = None,
    cli_client_lib_dir: Optional[str] = None,
    cli_gen_src_dir: Optional[str] = None,
    cli_gen_discovery_docs_dir: Optional[str] = None,
    cli_server_archives: Optional[list[str]] = None,
    cli_tools_jar: Optional[str] = None,
) -> ProjectConfig:
    """Resolve the effective project configuration.

    Precedence (high to low):
        1. CLI flags (``cli_*`` arguments; empty lists count as unset)
        2. Environment variables (``ENDPOINTS_CLIENT_LIB_DIR``,
           ``ENDPOINTS_CLIENT_GEN_SRC_DIR``, ``ENDPOINTS_TOOLS_JAR``)
        3. Project config file
        4. Defaults

    Returns:
        A new :class:`~endpoints_client.models.ProjectConfig` with overrides
        applied.
    """
    config = load_project_config(project_dir)
    updates: dict = {}
    generator_updates: dict = {}

    env_client_lib_dir = os.environ.get(ENV_CLIENT_LIB_DIR)
    env_gen_src_dir = os.environ.get(ENV_GEN_SRC_DIR)
    env_tools_jar = os.environ.get(ENV_TOOLS_JAR)
    if env_client_lib_dir:
        updates["client_lib_dir"] = env_client_lib_dir
    if env_gen_src_dir:
        updates["gen_src_dir"] = env_gen_src_dir
    if env_tools_jar:
        generator_updates["tools_jar"] = env_tools_jar

    if cli_discovery_docs:
        updates["discovery_docs"] = list(cli_discovery_docs)
    if cli_client_lib_dir is not None:
        updates["client_lib_dir"] = cli_client_lib_dir
    if cli_gen_src_dir is not None:
        updates["gen_src_dir"] = cli_gen_src_dir
    if cli_gen_discovery_docs_dir is not None:
        updates["gen_discovery_docs_dir"] = cli_gen_discovery_docs_dir
    if cli_server_archives:
        updates["endpoints_server"] = list(cli_server_archives)
    if cli_tools_jar is not None:
        generator_updates["tools_jar"] = cli_tools_jar

    if generator_updates:
        updates["generator"] = config.generator.model_copy(update=generator_updates)
    return config.model_copy(update=updates)

"""Configuration management for vlog.

Three-layer config resolution (highest priority wins):
  1. Explicit overrides — CLI flags or init_vlog() keyword arguments
  2. Project config — .vlog.json in the working directory or a parent
  3. Global config — ~/.vlog/config.json

The global config file also backs the preference store that remembers
the chosen verbosity level across sessions.
"""

import json
import os
import threading
from pathlib import Path


PROJECT_CONFIG_NAME = ".vlog.json"

# Keys understood by resolve_config()
CONFIG_KEYS = ["surface", "suppress_logs", "runtime_level", "working_dir"]


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.vlog/)."""
    return Path.home() / ".vlog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .vlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object from a file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .vlog.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(overrides=None, keys=None, start_dir=None):
    """Resolve config values using three-layer precedence.

    For each key in `keys`, checks (in order):
      1. `overrides` (dict; None values count as unset)
      2. Project .vlog.json
      3. Global ~/.vlog/config.json

    JSON files may spell keys with dashes or underscores.

    Returns a dict with resolved values (None when unset everywhere).
    """
    if keys is None:
        keys = CONFIG_KEYS
    overrides = overrides or {}

    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config()

    resolved = {}
    for key in keys:
        arg_key = key.replace("-", "_")
        json_key = arg_key.replace("_", "-")

        # Layer 1: explicit
        value = overrides.get(arg_key)
        if value is not None:
            resolved[arg_key] = value
            continue

        # Layer 2 and 3: project, then global
        for cfg in (project_cfg, global_cfg):
            value = cfg.get(arg_key, cfg.get(json_key))
            if value is not None:
                break
        resolved[arg_key] = value

    return resolved


def as_bool(value, default=None):
    """Interpret a config value as a boolean ('true', 'yes', '1', ...)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    return default


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_json(data, path):
    """Write a JSON object to `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path


def save_project_config(data, project_dir=None):
    """Write .vlog.json to the project directory."""
    return save_json(data, Path(project_dir or os.getcwd()) / PROJECT_CONFIG_NAME)


def save_global_config(data):
    """Write the global config file."""
    return save_json(data, get_global_config_path())


# ---------------------------------------------------------------------------
# Preference store
# ---------------------------------------------------------------------------
class JsonPreferenceStore:
    """String preferences persisted in a JSON file.

    Defaults to the global config file, so the remembered log level sits
    next to the other global settings::

        {
          "surface": "terminal",
          "VSDK_EDITOR_LOG_LEVEL": "Info"
        }

    Reads never raise (an unreadable file reads as empty). Writes are a
    locked read-modify-write so other keys in the file survive.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else get_global_config_path()
        self._lock = threading.Lock()

    def get(self, key, default=None):
        with self._lock:
            value = load_json(self.path).get(key, default)
        return None if value is None else str(value)

    def set(self, key, value):
        with self._lock:
            data = load_json(self.path)
            data[key] = value
            save_json(data, self.path)

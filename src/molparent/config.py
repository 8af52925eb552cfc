import os
from pathlib import Path


# You can set your custom data directory by running (change path to desired location): export MOLPARENT_DATA_DIR="~/user/molparent_data"
# If not set, defaults to ~/.molparent/

def get_data_root() -> Path:
    # Allow user to override via environment variable
    custom = os.getenv("MOLPARENT_DATA_DIR")
    if custom:
        root = Path(custom).expanduser()
    else:
        # Default: ~/.molparent/
        root = Path.home() / ".molparent"

    root.mkdir(parents=True, exist_ok=True)
    return root


# Optional JSON document with cleanup parameters, e.g. export MOLPARENT_CLEANUP_PARAMS="~/params.json"
# Keys follow the camelCase names (maxRestarts, preferOrganic, tautomerRemoveSp3Stereo, ...)

def get_cleanup_params_path() -> Path | None:
    custom = os.getenv("MOLPARENT_CLEANUP_PARAMS")
    if not custom:
        return None
    return Path(custom).expanduser()


def get_default_cleanup_params():
    """Return the CleanupParameters used by the tools: the env-configured document or the built-in defaults."""
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, cleanup_params_from_file

    path = get_cleanup_params_path()
    if path is None:
        return DEFAULT_CLEANUP_PARAMS
    return cleanup_params_from_file(path)


DATA_ROOT = get_data_root()
LOG_PATH = DATA_ROOT / "history.log"

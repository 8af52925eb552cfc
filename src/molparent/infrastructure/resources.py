"""
Project manifest and resource store.

Datasets produced by the standardization tools are written next to a project
manifest (``<project>_manifest.json``) that records every stored file, when it
was created and by which tool. Stored files are named
``<filename>_<type>_<8 hex chars><ext>`` so the type can always be read back
from the name.
"""

import inspect
import json
import secrets
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pandas as pd

from molparent import config


def _save_csv(df, path: Path):
    if not hasattr(df, "to_csv"):
        raise TypeError("csv resources must be DataFrames")
    df.to_csv(path, index=False)


def _load_csv(path: Path):
    return pd.read_csv(path)


def _save_json(obj, path: Path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2)


def _load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


TYPE_REGISTRY: dict[str, dict[str, Any]] = {
    "csv": {"ext": ".csv", "save": _save_csv, "load": _load_csv},
    "json": {"ext": ".json", "save": _save_json, "load": _load_json},
}


def get_supported_resource_types() -> list[str]:
    """Return the resource types the store can save and load."""
    return list(TYPE_REGISTRY)


def _get_timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")


def _generate_id(type_tag: str) -> str:
    """Unique suffix {type_tag}_{8 hex chars}{ext} so repeated filenames never overwrite."""
    return f"{type_tag}_{secrets.token_hex(4).upper()}{TYPE_REGISTRY[type_tag]['ext']}"


def _calling_tool() -> str:
    # Private helpers sit between the public tool and the store
    for frame_info in inspect.stack()[2:]:
        if frame_info.filename != __file__ and not frame_info.function.startswith("_"):
            return frame_info.function
    return "unknown"


def _check_if_manifest_exists(project_manifest_path: str) -> None:
    if not Path(project_manifest_path).exists():
        raise FileNotFoundError(
            f"Project manifest not found at {project_manifest_path}. Create one with "
            f"create_project_manifest(). The default data directory is {config.DATA_ROOT}"
        )


def _store_resource(obj: Any, project_manifest_path: str, filename: str, explanation: str, type_tag: str) -> str:
    """Internal: write obj next to the manifest, track it, and return the stored filename."""
    if type_tag not in TYPE_REGISTRY:
        raise ValueError(f"Unsupported resource type: {type_tag}")
    _check_if_manifest_exists(project_manifest_path)

    stored_name = f"{filename}_{_generate_id(type_tag)}"
    path = Path(project_manifest_path).parent / stored_name
    TYPE_REGISTRY[type_tag]["save"](obj, path)

    add_to_project_manifest(
        project_manifest_path,
        filename=stored_name,
        type_tag=type_tag,
        explanation=explanation,
        created_by=_calling_tool(),
    )
    return stored_name


def _load_resource(project_manifest_path: str, filename: str) -> Any:
    """Internal: load a stored resource, inferring its type from the filename."""
    _check_if_manifest_exists(project_manifest_path)

    parts = Path(filename).stem.split("_")
    type_tag = parts[-2] if len(parts) >= 2 else None
    if type_tag not in TYPE_REGISTRY:
        raise ValueError(f"Cannot infer resource type from filename: {filename}")

    path = Path(project_manifest_path).parent / filename
    if not path.exists():
        raise FileNotFoundError(f"Resource file not found: {path}")
    return TYPE_REGISTRY[type_tag]["load"](path)


def create_project_manifest(path: str, project_name: str) -> dict:
    """Create a new project manifest to track standardized datasets in a directory.

    Creates <path>/<project_name>_manifest.json (and the directory if needed).
    Create the manifest BEFORE running dataset tools; every stored dataset is
    recorded in it.

    Args:
        path: Directory where the manifest and data files will be stored
        project_name: Name for this project (used in the manifest filename)

    Returns:
        dict with project_name, created_at and an empty resources list

    Raises:
        FileExistsError: If a manifest already exists at this location
    """
    project_manifest_path = Path(path) / f"{project_name}_manifest.json"
    if project_manifest_path.exists():
        raise FileExistsError(f"Project manifest already exists at {project_manifest_path}")

    Path(path).mkdir(parents=True, exist_ok=True)
    manifest = {
        "project_name": project_name,
        "created_at": _get_timestamp(),
        "resources": [],
    }
    _save_json(manifest, project_manifest_path)
    return manifest


def read_project_manifest(project_manifest_path: str) -> dict:
    """Read the project manifest with all tracked resources.

    Args:
        project_manifest_path: Full path to the <project>_manifest.json file

    Returns:
        dict with project_name, created_at and resources

    Raises:
        FileNotFoundError: If no manifest exists at this path.
    """
    _check_if_manifest_exists(project_manifest_path)
    return _load_json(Path(project_manifest_path))


def add_to_project_manifest(
    project_manifest_path: str,
    filename: str,
    type_tag: str,
    explanation: str = "unknown",
    created_by: str = "unknown",
) -> None:
    """Add a resource entry to the project manifest.

    Args:
        project_manifest_path: Full path to the <project>_manifest.json file
        filename: Stored filename of the resource
        type_tag: Resource type (csv or json)
        explanation: Brief one-sentence description of the resource
        created_by: Name of the tool that produced it
    """
    manifest = read_project_manifest(project_manifest_path)
    manifest["resources"].append({
        "filename": filename,
        "type_tag": type_tag,
        "explanation": explanation,
        "timestamp": _get_timestamp(),
        "created_by": created_by,
    })
    _save_json(manifest, Path(project_manifest_path))


def get_all_resources_tools() -> list[Callable]:
    """Return list of all resource management tools for MCP server."""
    return [
        create_project_manifest,
        read_project_manifest,
        get_supported_resource_types,
    ]

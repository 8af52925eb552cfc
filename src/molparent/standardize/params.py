"""
Cleanup parameters.

CleanupParameters is immutable: change individual fields with
``dataclasses.replace`` or bulk-load them from a JSON document whose keys are
the camelCase names below.

    {
        "maxRestarts": 200,
        "preferOrganic": false,
        "doCanonical": true,
        "maxTautomers": 1000,
        "maxTransforms": 1000,
        "tautomerRemoveSp3Stereo": true,
        "tautomerRemoveBondStereo": true,
        "tautomerRemoveIsotopicHs": true,
        "tautomerReassignStereo": true,
        "normalizations": "path/to/normalizations.txt",
        "acidbaseFile": "path/to/acid_base_pairs.txt",
        "fragmentFile": "path/to/fragments.txt",
        "tautomerTransforms": "path/to/tautomer_transforms.txt",
        "normalizationData": [{"name": "...", "smarts": "..."}],
        "acidbaseData": [{"name": "...", "acid": "...", "base": "..."}],
        "fragmentData": [{"name": "...", "smarts": "..."}],
        "tautomerTransformData": [{"name": "...", "smarts": "...", "bonds": "", "charges": ""}]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from molparent.errors import ConfigError


@dataclass(frozen=True)
class CleanupParameters:
    normalizations: Optional[str] = None
    acidbase_file: Optional[str] = None
    fragment_file: Optional[str] = None
    tautomer_transforms: Optional[str] = None
    max_restarts: int = 200
    prefer_organic: bool = False
    do_canonical: bool = True
    max_tautomers: int = 1000
    max_transforms: int = 1000
    tautomer_remove_sp3_stereo: bool = True
    tautomer_remove_bond_stereo: bool = True
    tautomer_remove_isotopic_hs: bool = True
    tautomer_reassign_stereo: bool = True
    normalization_data: Tuple[Tuple[str, ...], ...] = ()
    fragment_data: Tuple[Tuple[str, ...], ...] = ()
    acidbase_data: Tuple[Tuple[str, ...], ...] = ()
    tautomer_transform_data: Tuple[Tuple[str, ...], ...] = ()

    def __post_init__(self):
        for name in ("max_restarts", "max_tautomers", "max_transforms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}", context={name: value})

        for name in ("prefer_organic", "do_canonical", "tautomer_remove_sp3_stereo",
                     "tautomer_remove_bond_stereo", "tautomer_remove_isotopic_hs", "tautomer_reassign_stereo"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean, got {getattr(self, name)!r}")

        for name in ("normalizations", "acidbase_file", "fragment_file", "tautomer_transforms"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a file path string, got {value!r}")

        # Inline data must stay hashable so parameter values can key the rule cache
        for name in ("normalization_data", "fragment_data", "acidbase_data", "tautomer_transform_data"):
            rows = getattr(self, name)
            object.__setattr__(self, name, tuple(tuple(str(v) for v in row) for row in rows))


DEFAULT_CLEANUP_PARAMS = CleanupParameters()


# JSON key -> field name
_JSON_KEYS = {
    "normalizations": "normalizations",
    "acidbaseFile": "acidbase_file",
    "fragmentFile": "fragment_file",
    "tautomerTransforms": "tautomer_transforms",
    "maxRestarts": "max_restarts",
    "preferOrganic": "prefer_organic",
    "doCanonical": "do_canonical",
    "maxTautomers": "max_tautomers",
    "maxTransforms": "max_transforms",
    "tautomerRemoveSp3Stereo": "tautomer_remove_sp3_stereo",
    "tautomerRemoveBondStereo": "tautomer_remove_bond_stereo",
    "tautomerRemoveIsotopicHs": "tautomer_remove_isotopic_hs",
    "tautomerReassignStereo": "tautomer_reassign_stereo",
    "normalizationData": "normalization_data",
    "fragmentData": "fragment_data",
    "acidbaseData": "acidbase_data",
    "tautomerTransformData": "tautomer_transform_data",
}

# Inline data field -> object keys in record order (trailing keys are optional)
_DATA_KEYS = {
    "normalization_data": ("name", "smarts"),
    "fragment_data": ("name", "smarts"),
    "acidbase_data": ("name", "acid", "base"),
    "tautomer_transform_data": ("name", "smarts", "bonds", "charges"),
}
_REQUIRED_DATA_KEYS = {
    "normalization_data": 2,
    "fragment_data": 2,
    "acidbase_data": 3,
    "tautomer_transform_data": 2,
}


def _data_rows(field_name: str, entries: Any) -> Tuple[Tuple[str, ...], ...]:
    if not isinstance(entries, list):
        raise ConfigError(f"{field_name} must be a list of records")

    keys = _DATA_KEYS[field_name]
    required = _REQUIRED_DATA_KEYS[field_name]
    rows = []
    for i, entry in enumerate(entries):
        if isinstance(entry, dict):
            unknown = set(entry) - set(keys)
            if unknown:
                raise ConfigError(f"{field_name}[{i}] has unknown keys: {sorted(unknown)}")
            missing = [k for k in keys[:required] if k not in entry]
            if missing:
                raise ConfigError(f"{field_name}[{i}] is missing keys: {missing}")
            row = [entry[k] for k in keys if k in entry]
        elif isinstance(entry, list):
            row = entry
        else:
            raise ConfigError(f"{field_name}[{i}] must be an object or a list")
        rows.append(tuple(str(v) for v in row))
    return tuple(rows)


def update_cleanup_params_from_json(params: CleanupParameters, json_text: str) -> CleanupParameters:
    """Return a copy of params with the values found in a JSON document applied."""
    try:
        doc = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid cleanup parameters JSON: {e}") from e
    if not isinstance(doc, dict):
        raise ConfigError("Cleanup parameters JSON must be an object")

    unknown = sorted(set(doc) - set(_JSON_KEYS))
    if unknown:
        raise ConfigError(f"Unknown cleanup parameter keys: {unknown}", context={"keys": unknown})

    changes = {}
    for key, value in doc.items():
        field_name = _JSON_KEYS[key]
        if field_name in _DATA_KEYS:
            value = _data_rows(field_name, value)
        changes[field_name] = value

    return replace(params, **changes)


def cleanup_params_from_json(json_text: str) -> CleanupParameters:
    return update_cleanup_params_from_json(DEFAULT_CLEANUP_PARAMS, json_text)


def cleanup_params_from_file(path: Union[str, Path]) -> CleanupParameters:
    path = Path(path).expanduser()
    if not path.exists():
        raise ConfigError(f"Cleanup parameters file not found: {path}", context={"path": str(path)})
    return cleanup_params_from_json(path.read_text(encoding="utf-8"))


def cleanup_params_to_dict(params: CleanupParameters) -> dict:
    """camelCase dictionary of all parameter values, the inverse of the JSON loader."""
    by_field = {v: k for k, v in _JSON_KEYS.items()}
    out = {}
    for f in fields(params):
        value = getattr(params, f.name)
        if f.name in _DATA_KEYS:
            keys = _DATA_KEYS[f.name]
            value = [dict(zip(keys, row)) for row in value]
        out[by_field[f.name]] = value
    return out

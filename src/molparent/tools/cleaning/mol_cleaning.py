from collections import Counter
from dataclasses import replace
from typing import Callable

from molparent.config import get_default_cleanup_params
from molparent.infrastructure.logging import loggable
from molparent.infrastructure.resources import _load_resource, _store_resource
from molparent.standardize.params import CleanupParameters, update_cleanup_params_from_json
from molparent.tools.core_mol.smiles_ops import (
    _charge_parent_smiles,
    _cleanup_smiles,
    _enumerate_tautomers_smiles,
    _fragment_parent_smiles,
    _isotope_parent_smiles,
    _stereo_parent_smiles,
    _super_parent_smiles,
    _tautomer_parent_smiles,
)


def get_standardization_guidelines() -> str:
    """Return an overview of the standardization operations and when to use each.

    Returns
    -------
    str
        Multi-line description of cleanup and the parent operations.
    """
    guidelines = """
================================================================================
STRUCTURE STANDARDIZATION AND PARENT STRUCTURES
================================================================================

cleanup
    Remove explicit hydrogens, disconnect metals, normalize functional groups
    (nitro, sulfoxide, azide, ...) and move protons so the strongest acids are
    the ones ionized. Every other operation starts from this.
    Output Column: smiles_after_cleanup

fragment parent
    Remove known salts and solvents and keep the largest remaining fragment.
    Set prefer_organic=True to prefer carbon-containing fragments.
    Output Column: smiles_after_fragment_parent

charge parent
    Fragment parent, then neutralized where possible. Quaternary nitrogen
    stays charged and keeps an acid anion as its counter charge.
    Output Column: smiles_after_charge_parent

isotope parent / stereo parent
    Remove isotope labels / all stereochemistry.
    Output Columns: smiles_after_isotope_parent, smiles_after_stereo_parent

tautomer parent
    Canonical tautomer: fewest charged atoms, then the highest tautomer score
    (aromatic rings, C=O, ...), then the smallest SMILES.
    Output Column: smiles_after_tautomer_parent

super parent
    Charge, isotope, stereo and tautomer parent combined. Use it to group
    salts, labelled compounds, stereoisomers and tautomers of one compound.
    Output Column: smiles_after_super_parent

Every operation returns canonical SMILES. Per-molecule failures never stop a
run; they are reported as 'Failed: <reason>' in the comments column.

Parameters (all optional) can be passed as a JSON object via params_json,
e.g. '{"maxTautomers": 200, "preferOrganic": true}'.
================================================================================
"""
    return guidelines


def _resolve_params(params_json: str | None = None, prefer_organic: bool | None = None) -> CleanupParameters:
    params = get_default_cleanup_params()
    if params_json:
        params = update_cleanup_params_from_json(params, params_json)
    if prefer_organic is not None:
        params = replace(params, prefer_organic=prefer_organic)
    return params


def _run_on_list(smiles: list[str], op: Callable, params: CleanupParameters) -> tuple[list[str], list[str]]:
    out, comments = [], []
    for smi in smiles:
        new_smi, comment = op(smi, params)
        out.append(new_smi)
        comments.append(comment)
    return out, comments


def _standardize_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    explanation: str,
    list_fn: Callable,
    suffix: str,
    **kwargs,
) -> tuple[dict, list[str]]:
    df = _load_resource(project_manifest_path, input_filename)

    if column_name not in df.columns:
        raise ValueError(f"Column {column_name} not found in dataset.")

    new_smiles, comments = list_fn(df[column_name].tolist(), **kwargs)
    df[f'smiles_after_{suffix}'] = new_smiles
    df[f'comments_after_{suffix}'] = comments

    output_filename = _store_resource(df, project_manifest_path, output_filename, explanation, 'csv')

    return {
        "output_filename": output_filename,
        "n_rows": len(df),
        "columns": list(df.columns),
        "comments": dict(Counter(comments)),
        "preview": df.head(5).to_dict(orient="records"),
    }, comments


def cleanup_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[str], list[str]]:
    """Clean up SMILES strings: normalize functional groups, reionize, disconnect metals.

    Parameters
    ----------
    smiles : list[str]
        SMILES strings to clean up.
    params_json : str, optional
        JSON object with cleanup parameters (camelCase keys).

    Returns
    -------
    tuple[list[str], list[str]]
        (cleaned_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _cleanup_smiles, _resolve_params(params_json))


@loggable
def cleanup_smiles_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    params_json: str | None = None,
    explanation: str = "Clean up SMILES (normalize, reionize, disconnect metals)"
) -> dict:
    """Clean up SMILES strings in a dataset column.

    Parameters
    ----------
    input_filename : str
        Input dataset filename.
    column_name : str
        Column with SMILES to clean up.
    project_manifest_path : str
        Path to project manifest.
    output_filename : str
        Output filename (without extension).
    params_json : str, optional
        JSON object with cleanup parameters.
    explanation : str
        Description of operation.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note, suggestions.
        Adds columns: smiles_after_cleanup, comments_after_cleanup.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        cleanup_smiles, "cleanup", params_json=params_json,
    )
    result["note"] = "Successful cleanup is marked by 'Passed' in comments, failure is marked by 'Failed: <reason>'."
    result["suggestions"] = "Consider computing the fragment parent to remove salts and solvents, or the super parent to group all forms of a compound."
    return result


def fragment_parent_smiles(
    smiles: list[str], prefer_organic: bool | None = None, params_json: str | None = None
) -> tuple[list[str], list[str]]:
    """Remove salts and solvents and keep the largest fragment of each SMILES.

    Parameters
    ----------
    smiles : list[str]
        SMILES strings.
    prefer_organic : bool, optional
        Prefer fragments that contain carbon over larger inorganic ones.
    params_json : str, optional
        JSON object with cleanup parameters (camelCase keys).

    Returns
    -------
    tuple[list[str], list[str]]
        (fragment_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _fragment_parent_smiles, _resolve_params(params_json, prefer_organic))


@loggable
def fragment_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    prefer_organic: bool | None = None,
    params_json: str | None = None,
    explanation: str = "Fragment parent (salts and solvents removed, largest fragment kept)"
) -> dict:
    """Compute the fragment parent of SMILES strings in a dataset column.

    Parameters
    ----------
    input_filename : str
        Input dataset filename.
    column_name : str
        Column with SMILES.
    project_manifest_path : str
        Path to project manifest.
    output_filename : str
        Output filename (without extension).
    prefer_organic : bool, optional
        Prefer carbon-containing fragments.
    params_json : str, optional
        JSON object with cleanup parameters.
    explanation : str
        Description of operation.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note, warning.
        Adds columns: smiles_after_fragment_parent, comments_after_fragment_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        fragment_parent_smiles, "fragment_parent", prefer_organic=prefer_organic, params_json=params_json,
    )
    result["note"] = "Only the largest fragment is kept. Known salts and solvents are removed first unless they are all that is left."
    result["warning"] = "Mixtures and co-crystals lose all but one component."
    return result


def charge_parent_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[str], list[str]]:
    """Fragment parent of each SMILES, neutralized where possible.

    Returns
    -------
    tuple[list[str], list[str]]
        (charge_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _charge_parent_smiles, _resolve_params(params_json))


@loggable
def charge_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    params_json: str | None = None,
    explanation: str = "Charge parent (largest fragment, neutralized)"
) -> dict:
    """Compute the charge parent of SMILES strings in a dataset column.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note, warning.
        Adds columns: smiles_after_charge_parent, comments_after_charge_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        charge_parent_smiles, "charge_parent", params_json=params_json,
    )
    result["note"] = "The charge parent includes the fragment parent; no separate fragment step is needed."
    result["warning"] = "Quaternary ammonium and other permanently charged groups stay charged."
    return result


def isotope_parent_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[str], list[str]]:
    """Remove isotope labels from each SMILES.

    Returns
    -------
    tuple[list[str], list[str]]
        (isotope_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _isotope_parent_smiles, _resolve_params(params_json))


@loggable
def isotope_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    params_json: str | None = None,
    explanation: str = "Isotope parent (isotope labels removed)"
) -> dict:
    """Compute the isotope parent of SMILES strings in a dataset column.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note.
        Adds columns: smiles_after_isotope_parent, comments_after_isotope_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        isotope_parent_smiles, "isotope_parent", params_json=params_json,
    )
    result["note"] = "Deuterium and tritium become ordinary hydrogens."
    return result


def stereo_parent_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[str], list[str]]:
    """Remove all stereochemistry from each SMILES.

    Returns
    -------
    tuple[list[str], list[str]]
        (stereo_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _stereo_parent_smiles, _resolve_params(params_json))


@loggable
def stereo_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    params_json: str | None = None,
    explanation: str = "Stereo parent (stereochemistry removed)"
) -> dict:
    """Compute the stereo parent of SMILES strings in a dataset column.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, warning.
        Adds columns: smiles_after_stereo_parent, comments_after_stereo_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        stereo_parent_smiles, "stereo_parent", params_json=params_json,
    )
    result["warning"] = "Stereoisomers collapse onto one structure. Check for duplicates with conflicting labels."
    return result


def tautomer_parent_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[str], list[str]]:
    """Canonical tautomer of each SMILES.

    Returns
    -------
    tuple[list[str], list[str]]
        (tautomer_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _tautomer_parent_smiles, _resolve_params(params_json))


@loggable
def tautomer_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    params_json: str | None = None,
    explanation: str = "Tautomer parent (canonical tautomer)"
) -> dict:
    """Compute the canonical tautomer of SMILES strings in a dataset column.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note.
        Adds columns: smiles_after_tautomer_parent, comments_after_tautomer_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        tautomer_parent_smiles, "tautomer_parent", params_json=params_json,
    )
    result["note"] = "The canonical tautomer is a consistent representative, not necessarily the dominant form in solution."
    return result


def super_parent_smiles(
    smiles: list[str], prefer_organic: bool | None = None, params_json: str | None = None
) -> tuple[list[str], list[str]]:
    """Super parent of each SMILES: charge, isotope, stereo and tautomer parent combined.

    Returns
    -------
    tuple[list[str], list[str]]
        (super_parent_smiles, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _super_parent_smiles, _resolve_params(params_json, prefer_organic))


@loggable
def super_parent_dataset(
    input_filename: str,
    column_name: str,
    project_manifest_path: str,
    output_filename: str,
    prefer_organic: bool | None = None,
    params_json: str | None = None,
    explanation: str = "Super parent (fragment, charge, isotope, stereo and tautomer parent)"
) -> dict:
    """Compute the super parent of SMILES strings in a dataset column.

    Returns
    -------
    dict
        output_filename, n_rows, columns, comments (counts), preview, note, suggestions.
        Adds columns: smiles_after_super_parent, comments_after_super_parent.
    """
    result, _ = _standardize_dataset(
        input_filename, column_name, project_manifest_path, output_filename, explanation,
        super_parent_smiles, "super_parent", prefer_organic=prefer_organic, params_json=params_json,
    )
    result["note"] = "Salts, charge states, labelled forms, stereoisomers and tautomers of one compound share a super parent."
    result["suggestions"] = "Group rows by smiles_after_super_parent to find different forms of the same compound."
    return result


@loggable
def enumerate_tautomers_smiles(smiles: list[str], params_json: str | None = None) -> tuple[list[list[str]], list[str]]:
    """Enumerate the tautomers of each SMILES.

    Parameters
    ----------
    smiles : list[str]
        SMILES strings.
    params_json : str, optional
        JSON object with cleanup parameters (e.g. '{"maxTautomers": 50}').

    Returns
    -------
    tuple[list[list[str]], list[str]]
        (sorted tautomer SMILES per input, comments). Comments: "Passed" or "Failed: <reason>".
    """
    return _run_on_list(smiles, _enumerate_tautomers_smiles, _resolve_params(params_json))


def get_all_standardization_tools() -> list[Callable]:
    """Return a list of all standardization tools exposed to the MCP server."""
    return [
        get_standardization_guidelines,

        # SMILES-level functions
        cleanup_smiles,
        fragment_parent_smiles,
        charge_parent_smiles,
        isotope_parent_smiles,
        stereo_parent_smiles,
        tautomer_parent_smiles,
        super_parent_smiles,
        enumerate_tautomers_smiles,

        # Dataset-level functions
        cleanup_smiles_dataset,
        fragment_parent_dataset,
        charge_parent_dataset,
        isotope_parent_dataset,
        stereo_parent_dataset,
        tautomer_parent_dataset,
        super_parent_dataset,
    ]

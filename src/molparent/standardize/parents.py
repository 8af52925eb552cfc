"""
Standardization pipeline and parent structures.

cleanup() is the basic standardization every parent starts from:

    remove explicit Hs -> disconnect metals -> sanitize -> normalize -> reionize -> sanitize -> stereo

The *_parent functions strip one kind of variation each (fragments, charge,
isotopes, stereochemistry, tautomerism); super_parent strips all of them.
Every function returns a new molecule and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List

from rdkit import Chem
from rdkit.Chem.rdchem import Mol

from molparent.standardize.fragment import choose_largest_fragment, remove_fragments
from molparent.standardize.graph import canonical_signature, copy_mol, remove_hs, sanitize
from molparent.standardize.metal import disconnect_metals
from molparent.standardize.normalize import normalize
from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters
from molparent.standardize.reionize import reionize, uncharge
from molparent.standardize.tautomer import canonical_tautomer, enumerate_tautomers


def cleanup(mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS) -> Mol:
    mol = remove_hs(mol)
    mol = disconnect_metals(mol)
    mol = normalize(mol, params)
    mol = reionize(mol, params)
    sanitize(mol)
    Chem.AssignStereochemistry(mol, cleanIt=True, force=True)
    return mol


def fragment_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Largest organic covalent unit after removing salts and solvents."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    mol = remove_fragments(mol, params, leave_last=True)
    return choose_largest_fragment(mol, params.prefer_organic)


def charge_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Fragment parent, neutralized where possible."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    fragment = fragment_parent(mol, params, skip_standardize=True)
    uncharged = uncharge(reionize(fragment, params))
    return cleanup(uncharged, params)


def isotope_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Same structure with every isotope label removed."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    mol = copy_mol(mol)
    for atom in mol.GetAtoms():
        atom.SetIsotope(0)
    # Former deuterium/tritium atoms are now ordinary explicit Hs
    return sanitize(remove_hs(mol))


def stereo_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Same structure with all stereochemistry removed."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    mol = copy_mol(mol)
    Chem.RemoveStereochemistry(mol)
    return mol


def tautomer_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Canonical tautomer of the cleaned-up structure."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    tautomer = canonical_tautomer(mol, params)
    return cleanup(tautomer, params)


def super_parent(
    mol: Mol, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS, skip_standardize: bool = False
) -> Mol:
    """Charge, isotope, stereo and tautomer parent combined."""
    if not skip_standardize:
        mol = cleanup(mol, params)
    mol = charge_parent(mol, params, skip_standardize=True)
    mol = isotope_parent(mol, params, skip_standardize=True)
    mol = stereo_parent(mol, params, skip_standardize=True)
    # A conformer kept from a molfile would otherwise bring the stereo back
    mol = tautomer_parent(mol, replace(params, tautomer_reassign_stereo=False), skip_standardize=True)
    return stereo_parent(mol, params, skip_standardize=True)


def _parse_smiles(smiles: str) -> Mol:
    mol = Chem.MolFromSmiles(smiles, sanitize=False)
    if mol is None:
        raise ValueError(f"Invalid SMILES: {smiles}")
    return mol


def standardize_smiles(smiles: str, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS) -> str:
    """Parse, clean up and write back canonical SMILES."""
    return canonical_signature(cleanup(_parse_smiles(smiles), params))


def enumerate_tautomer_smiles(smiles: str, params: CleanupParameters = DEFAULT_CLEANUP_PARAMS) -> List[str]:
    """Sorted canonical SMILES of every tautomer of the cleaned-up structure."""
    mol = cleanup(_parse_smiles(smiles), params)
    result = enumerate_tautomers(mol, params)
    return sorted(result.tautomers)


__all__ = [
    "cleanup",
    "normalize",
    "reionize",
    "uncharge",
    "remove_fragments",
    "choose_largest_fragment",
    "canonical_tautomer",
    "enumerate_tautomers",
    "fragment_parent",
    "charge_parent",
    "isotope_parent",
    "stereo_parent",
    "tautomer_parent",
    "super_parent",
    "standardize_smiles",
    "enumerate_tautomer_smiles",
]

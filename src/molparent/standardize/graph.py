"""
Thin layer over the RDKit molecule graph used by every standardization stage.

Sanitization, substructure matching, canonical signatures and stereo
perception all come from RDKit; this module fixes how the pipeline calls them
and maps RDKit failures onto molparent errors.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Sequence, Tuple

from rdkit import Chem, RDLogger
from rdkit.Chem.rdchem import Mol

from molparent.errors import SanitizeError


@contextmanager
def quiet_rdkit():
    """Silence RDKit error/warning output while probing candidate structures."""
    RDLogger.DisableLog("rdApp.*")
    try:
        yield
    finally:
        RDLogger.EnableLog("rdApp.*")


def copy_mol(mol: Mol) -> Mol:
    return Chem.Mol(mol)


def sanitize(mol: Mol) -> Mol:
    """Sanitize in place; raise SanitizeError on valence/aromaticity failures."""
    try:
        Chem.SanitizeMol(mol)
    except (ValueError, RuntimeError) as e:
        raise SanitizeError(
            f"Sanitization failed: {e}", context={"smiles": _safe_smiles(mol)}
        ) from e
    return mol


def try_sanitize(mol: Mol) -> bool:
    """Sanitize in place and report success instead of raising."""
    with quiet_rdkit():
        return Chem.SanitizeMol(mol, catchErrors=True) == Chem.SanitizeFlags.SANITIZE_NONE


PARTIAL_SANITIZE_OPS = Chem.SanitizeFlags.SANITIZE_ALL ^ Chem.SanitizeFlags.SANITIZE_PROPERTIES


def sanitize_partial(mol: Mol) -> Mol:
    """Sanitize in place without the valence check.

    Input such as CN(=O)=O is only valid after normalization, so the stages
    before it perceive rings and aromaticity but tolerate hypervalent atoms.
    """
    mol.UpdatePropertyCache(strict=False)
    with quiet_rdkit():
        failed = Chem.SanitizeMol(mol, sanitizeOps=PARTIAL_SANITIZE_OPS, catchErrors=True)
    if failed != Chem.SanitizeFlags.SANITIZE_NONE:
        raise SanitizeError(f"Sanitization failed ({failed})", context={"smiles": _safe_smiles(mol)})
    return mol


def try_sanitize_partial(mol: Mol) -> bool:
    try:
        sanitize_partial(mol)
    except SanitizeError:
        return False
    return True


def count_chemistry_problems(mol: Mol) -> int:
    """Number of valence/kekulization problems RDKit finds, without raising."""
    with quiet_rdkit():
        return len(Chem.DetectChemistryProblems(mol))


def remove_hs(mol: Mol) -> Mol:
    """Drop ordinary explicit hydrogens; the result is partially sanitized."""
    mol = copy_mol(mol)
    mol.UpdatePropertyCache(strict=False)
    try:
        mol = Chem.RemoveHs(mol, sanitize=False)
    except (ValueError, RuntimeError) as e:
        raise SanitizeError(
            f"Could not remove hydrogens: {e}", context={"smiles": _safe_smiles(mol)}
        ) from e
    return sanitize_partial(mol)


def match_pattern(mol: Mol, pattern: Mol) -> Tuple[Tuple[int, ...], ...]:
    return mol.GetSubstructMatches(pattern)


def canonical_signature(mol: Mol) -> str:
    """Canonical isomeric SMILES, used as the structural identity of a state."""
    return Chem.MolToSmiles(mol, isomericSmiles=True, canonical=True)


def assign_stereochemistry_from_geometry(mol: Mol) -> Mol:
    """Recompute stereo tags, from the conformer when the molecule carries one."""
    if mol.GetNumConformers():
        conf = mol.GetConformer()
        if conf.Is3D():
            Chem.AssignStereochemistryFrom3D(mol, confId=conf.GetId(), replaceExistingTags=True)
            return mol
        Chem.AssignChiralTypesFromBondDirs(mol, confId=conf.GetId(), replaceExistingTags=True)
        Chem.DetectBondStereochemistry(mol, conf.GetId())
        Chem.AssignStereochemistry(mol, cleanIt=True, force=True)
        return mol
    Chem.AssignStereochemistry(mol, cleanIt=True, force=True)
    return mol


def fragment_atom_indices(mol: Mol) -> Tuple[Tuple[int, ...], ...]:
    return Chem.GetMolFrags(mol, asMols=False, sanitizeFrags=False)


def fragment_mols(mol: Mol) -> Tuple[Mol, ...]:
    return Chem.GetMolFrags(mol, asMols=True, sanitizeFrags=False)


def keep_atoms(mol: Mol, keep: Iterable[int]) -> Mol:
    """Return a copy holding only the given atoms, annotations untouched."""
    keep = set(keep)
    rwmol = Chem.RWMol(mol)
    for idx in sorted(range(mol.GetNumAtoms()), reverse=True):
        if idx not in keep:
            rwmol.RemoveAtom(idx)
    return rwmol.GetMol()


def combine_fragments(fragments: Sequence[Mol]) -> Mol:
    """Join fragments into one molecule, preserving their order."""
    if not fragments:
        return Chem.Mol()
    combined = fragments[0]
    for frag in fragments[1:]:
        combined = Chem.CombineMols(combined, frag)
    return combined


def formal_charge(mol: Mol) -> int:
    return Chem.GetFormalCharge(mol)


def shift_hydrogens(atom: Chem.Atom, delta: int) -> None:
    """Add (or remove, for negative delta) hydrogens on an atom and pin its H count."""
    n_hs = atom.GetTotalNumHs() + delta
    if n_hs < 0:
        raise SanitizeError(
            f"Cannot remove {-delta} hydrogen(s) from atom {atom.GetIdx()}", context={"atom": atom.GetIdx()}
        )
    atom.SetNumExplicitHs(n_hs)
    atom.SetNoImplicit(True)


def _safe_smiles(mol: Mol) -> str:
    try:
        return Chem.MolToSmiles(mol)
    except Exception:
        return "<unwritable>"

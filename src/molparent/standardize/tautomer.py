"""
Tautomer enumeration and canonical tautomer selection.

Tautomers are explored breadth-first from the input. Every match of every
transform yields one candidate: a hydrogen moves from the first to the last
matched atom and the bonds (and optionally charges) along the matched path
change. Candidates that do not sanitize are dropped; the rest are deduplicated
by canonical SMILES.

The canonical tautomer is the candidate with the fewest charged atoms, then
the highest score, then the smallest SMILES:

    +100 per fully aromatic ring, +150 more when the ring is all carbon
    + substructure contributions (C=O, oxime, methyl, ...)
    -1 per hydrogen on P, S, Se or Te
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence

from rdkit import Chem
from rdkit.Chem.rdchem import BondDir, BondStereo, BondType, ChiralType, Mol

from molparent.constants import (
    AROMATIC_RING_SCORE,
    CARBOCYCLIC_AROMATIC_RING_BONUS,
    TAUTOMER_H_PENALTY_ELEMENTS,
)
from molparent.standardize.graph import (
    assign_stereochemistry_from_geometry,
    canonical_signature,
    copy_mol,
    match_pattern,
    sanitize,
    shift_hydrogens,
    try_sanitize,
)
from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters
from molparent.standardize.rules import TautomerScore, TautomerTransform, get_rule_tables


logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_MAX_TRANSFORMS = "max_transforms_reached"
STATUS_MAX_TAUTOMERS = "max_tautomers_reached"


@dataclass
class TautomerEnumerationResult:
    """Tautomers keyed by canonical SMILES, in discovery order (the input first)."""

    tautomers: Dict[str, Mol]
    status: str = STATUS_COMPLETED
    transforms_applied: int = 0
    modified_atoms: FrozenSet[int] = field(default_factory=frozenset)
    modified_bonds: FrozenSet[int] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.tautomers)

    @property
    def smiles(self) -> List[str]:
        return list(self.tautomers)

    @property
    def completed(self) -> bool:
        return self.status == STATUS_COMPLETED


def _kekulized(mol: Mol) -> Mol:
    kekule = copy_mol(mol)
    Chem.Kekulize(kekule, clearAromaticFlags=True)
    return kekule


def _participating_atoms(mol: Mol, transforms: Sequence[TautomerTransform]) -> set:
    atoms = set()
    for transform in transforms:
        for match in match_pattern(mol, transform.pattern):
            atoms.update(match)
    return atoms


def _remove_isotopic_hs(mol: Mol, transforms: Sequence[TautomerTransform]) -> Mol:
    """Turn isotopic H atoms on transform sites into ordinary hydrogen counts."""
    participating = _participating_atoms(_kekulized(mol), transforms)
    doomed = []
    rwmol = Chem.RWMol(mol)
    for atom in rwmol.GetAtoms():
        if atom.GetAtomicNum() != 1 or atom.GetIsotope() == 0:
            continue
        neighbors = atom.GetNeighbors()
        if len(neighbors) != 1 or neighbors[0].GetIdx() not in participating:
            continue
        shift_hydrogens(neighbors[0], 1)
        doomed.append(atom.GetIdx())

    if not doomed:
        return mol
    for idx in sorted(doomed, reverse=True):
        rwmol.RemoveAtom(idx)
    result = rwmol.GetMol()
    sanitize(result)
    return result


def _apply_transform(kekule: Mol, match, transform: TautomerTransform) -> Optional[Mol]:
    """Apply one transform at one match of a kekulized molecule; None if not chemically possible."""
    donor_idx, acceptor_idx = match[0], match[-1]
    if kekule.GetAtomWithIdx(donor_idx).GetTotalNumHs() == 0:
        return None

    rwmol = Chem.RWMol(kekule)
    for k in range(len(match) - 1):
        bond = rwmol.GetBondBetweenAtoms(match[k], match[k + 1])
        if bond is None:
            return None
        if transform.bond_types:
            new_type = transform.bond_types[k]
        elif bond.GetBondType() == BondType.SINGLE:
            new_type = BondType.DOUBLE
        elif bond.GetBondType() == BondType.DOUBLE:
            new_type = BondType.SINGLE
        else:
            return None
        bond.SetBondType(new_type)
        bond.SetIsAromatic(new_type == BondType.AROMATIC)
        if new_type != BondType.DOUBLE:
            bond.SetStereo(BondStereo.STEREONONE)

    for idx, delta in zip(match, transform.charge_deltas):
        atom = rwmol.GetAtomWithIdx(idx)
        atom.SetFormalCharge(atom.GetFormalCharge() + delta)

    shift_hydrogens(rwmol.GetAtomWithIdx(donor_idx), -1)
    shift_hydrogens(rwmol.GetAtomWithIdx(acceptor_idx), 1)

    product = rwmol.GetMol()
    if not try_sanitize(product):
        return None
    return product


def _path_bonds(mol: Mol, match) -> List[int]:
    return [mol.GetBondBetweenAtoms(match[k], match[k + 1]).GetIdx() for k in range(len(match) - 1)]


def _strip_stereo(mol: Mol, atoms: FrozenSet[int], params: CleanupParameters) -> Mol:
    """Remove stereo that tautomerism makes meaningless on the modified atoms."""
    if not atoms or not (params.tautomer_remove_sp3_stereo or params.tautomer_remove_bond_stereo):
        return mol
    mol = copy_mol(mol)
    if params.tautomer_remove_sp3_stereo:
        for idx in atoms:
            mol.GetAtomWithIdx(idx).SetChiralTag(ChiralType.CHI_UNSPECIFIED)
    if params.tautomer_remove_bond_stereo:
        for bond in mol.GetBonds():
            if bond.GetBondType() != BondType.DOUBLE:
                continue
            if bond.GetBeginAtomIdx() not in atoms and bond.GetEndAtomIdx() not in atoms:
                continue
            bond.SetStereo(BondStereo.STEREONONE)
            for end in (bond.GetBeginAtom(), bond.GetEndAtom()):
                for nbr_bond in end.GetBonds():
                    if nbr_bond.GetBondDir() in (BondDir.ENDUPRIGHT, BondDir.ENDDOWNRIGHT):
                        nbr_bond.SetBondDir(BondDir.NONE)
    Chem.AssignStereochemistry(mol, cleanIt=True, force=True)
    return mol


def enumerate_tautomers(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[TautomerTransform]] = None,
) -> TautomerEnumerationResult:
    if rules is None:
        rules = get_rule_tables(params).tautomer_transforms

    mol = sanitize(copy_mol(mol))
    if params.tautomer_remove_isotopic_hs:
        mol = _remove_isotopic_hs(mol, rules)

    start_sig = canonical_signature(mol)
    tautomers: Dict[str, Mol] = {start_sig: mol}
    kekules: Dict[str, Mol] = {start_sig: _kekulized(mol)}
    queue = deque([start_sig])
    modified_atoms, modified_bonds = set(), set()
    n_transforms = 0
    status = STATUS_COMPLETED

    while queue and status == STATUS_COMPLETED:
        kekule = kekules[queue.popleft()]
        for transform in rules:
            if status != STATUS_COMPLETED:
                break
            for match in match_pattern(kekule, transform.pattern):
                if n_transforms >= params.max_transforms:
                    status = STATUS_MAX_TRANSFORMS
                    break
                product = _apply_transform(kekule, match, transform)
                if product is None:
                    continue
                n_transforms += 1
                modified_atoms.update(match)
                modified_bonds.update(_path_bonds(kekule, match))

                sig = canonical_signature(product)
                if sig in tautomers:
                    continue
                if len(tautomers) >= params.max_tautomers:
                    status = STATUS_MAX_TAUTOMERS
                    break
                logger.debug("Tautomer %s from %s", sig, transform.name)
                tautomers[sig] = product
                kekules[sig] = _kekulized(product)
                queue.append(sig)

    if status != STATUS_COMPLETED:
        logger.warning("Tautomer enumeration stopped early (%s) with %d tautomers", status, len(tautomers))

    modified_atoms = frozenset(modified_atoms)
    stripped: Dict[str, Mol] = {}
    for taut in tautomers.values():
        taut = _strip_stereo(taut, modified_atoms, params)
        stripped.setdefault(canonical_signature(taut), taut)

    return TautomerEnumerationResult(
        tautomers=stripped,
        status=status,
        transforms_applied=n_transforms,
        modified_atoms=modified_atoms,
        modified_bonds=frozenset(modified_bonds),
    )


def score_tautomer(mol: Mol, scores: Optional[Sequence[TautomerScore]] = None) -> int:
    if scores is None:
        scores = get_rule_tables().tautomer_scores

    score = 0
    ring_info = mol.GetRingInfo()
    for atom_ring, bond_ring in zip(ring_info.AtomRings(), ring_info.BondRings()):
        if all(mol.GetBondWithIdx(b).GetIsAromatic() for b in bond_ring):
            score += AROMATIC_RING_SCORE
            if all(mol.GetAtomWithIdx(a).GetAtomicNum() == 6 for a in atom_ring):
                score += CARBOCYCLIC_AROMATIC_RING_BONUS

    for entry in scores:
        score += len(match_pattern(mol, entry.pattern)) * entry.score

    for atom in mol.GetAtoms():
        if atom.GetAtomicNum() in TAUTOMER_H_PENALTY_ELEMENTS:
            score -= atom.GetTotalNumHs()
    return score


def _charged_atoms(mol: Mol) -> int:
    return sum(1 for atom in mol.GetAtoms() if atom.GetFormalCharge() != 0)


def canonical_tautomer(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[TautomerTransform]] = None,
) -> Mol:
    tables = get_rule_tables(params)
    result = enumerate_tautomers(mol, params, rules)

    def sort_key(item):
        smiles, taut = item
        return (_charged_atoms(taut), -score_tautomer(taut, tables.tautomer_scores), smiles)

    smiles, best = min(result.tautomers.items(), key=sort_key)
    logger.debug("Canonical tautomer %s out of %d", smiles, len(result))

    best = copy_mol(best)
    if params.tautomer_reassign_stereo:
        assign_stereochemistry_from_geometry(best)
    return best

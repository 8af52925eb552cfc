"""
Reionizer and Uncharger.

reionize() moves protons so that the strongest acids are the ones left
ionized: while the strongest protonated acid is stronger than the weakest
ionized base, one proton moves from the former to the latter. Total formal
charge is conserved.

uncharge() neutralizes a molecule as far as possible by adding or removing
hydrogens, keeping quaternary cations and balancing them with acid anions.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from rdkit import Chem
from rdkit.Chem.rdchem import Mol

from molparent.standardize.graph import copy_mol, match_pattern, sanitize, shift_hydrogens
from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters
from molparent.standardize.rules import AcidBasePair, get_rule_tables


logger = logging.getLogger(__name__)


def _strongest_protonated(mol: Mol, pairs: Sequence[AcidBasePair]) -> Tuple[Optional[int], Optional[Tuple[int, ...]]]:
    for position, pair in enumerate(pairs):
        for match in match_pattern(mol, pair.acid):
            return position, match
    return None, None


def _weakest_ionized(mol: Mol, pairs: Sequence[AcidBasePair]) -> Tuple[Optional[int], Optional[Tuple[int, ...]]]:
    for position in range(len(pairs) - 1, -1, -1):
        for match in match_pattern(mol, pairs[position].base):
            return position, match
    return None, None


def reionize(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[AcidBasePair]] = None,
) -> Mol:
    if rules is None:
        rules = get_rule_tables(params).acid_base_pairs

    mol = copy_mol(mol)
    already_moved = set()

    while True:
        acid_pos, acid_match = _strongest_protonated(mol, rules)
        base_pos, base_match = _weakest_ionized(mol, rules)
        if acid_match is None or base_match is None or acid_pos >= base_pos:
            break

        donor_idx, acceptor_idx = acid_match[-1], base_match[-1]
        if donor_idx == acceptor_idx:
            logger.warning("Aborted reionization: atom %d would donate and accept the proton", donor_idx)
            break

        key = (donor_idx, acceptor_idx)
        if key in already_moved:
            logger.warning("Aborted reionization: ambiguous proton placement between atoms %d and %d", *key)
            break
        already_moved.add(key)

        logger.debug("Moved proton from %s to %s", rules[acid_pos].name, rules[base_pos].name)

        donor = mol.GetAtomWithIdx(donor_idx)
        shift_hydrogens(donor, -1)
        donor.SetFormalCharge(donor.GetFormalCharge() - 1)

        acceptor = mol.GetAtomWithIdx(acceptor_idx)
        shift_hydrogens(acceptor, 1)
        acceptor.SetFormalCharge(acceptor.GetFormalCharge() + 1)

        mol.UpdatePropertyCache(strict=False)

    sanitize(mol)
    return mol


# Uncharger patterns
POS_H = Chem.MolFromSmarts('[+!H0!$(*~[-])]')
POS_QUAT = Chem.MolFromSmarts('[+H0!$(*~[-])]')
NEG = Chem.MolFromSmarts('[-!$(*~[+H0])]')
NEG_ACID = Chem.MolFromSmarts('[$([O-][C,P,S]=O),$([n-]1nnnc1),$(n1[n-]nnc1)]')


def uncharge(mol: Mol) -> Mol:
    """Neutralize by adding/removing hydrogens; quaternary cations stay charged."""
    mol = copy_mol(mol)

    pos_h = [m[0] for m in match_pattern(mol, POS_H)]
    pos_quat = [m[0] for m in match_pattern(mol, POS_QUAT)]
    neg = [m[0] for m in match_pattern(mol, NEG)]
    neg_acid = [m[0] for m in match_pattern(mol, NEG_ACID)]

    if pos_quat:
        # Only neutralize acid anions beyond what balances the quaternary centres
        neg_surplus = len(neg) - len(pos_quat)
        while neg_surplus > 0 and neg_acid:
            atom = mol.GetAtomWithIdx(neg_acid.pop(0))
            shift_hydrogens(atom, 1)
            atom.SetFormalCharge(atom.GetFormalCharge() + 1)
            neg_surplus -= 1
            logger.debug("Removed negative charge on atom %d", atom.GetIdx())
    else:
        for idx in neg:
            atom = mol.GetAtomWithIdx(idx)
            while atom.GetFormalCharge() < 0:
                shift_hydrogens(atom, 1)
                atom.SetFormalCharge(atom.GetFormalCharge() + 1)
                logger.debug("Removed negative charge on atom %d", idx)

    for idx in pos_h:
        atom = mol.GetAtomWithIdx(idx)
        while atom.GetFormalCharge() > 0 and atom.GetTotalNumHs() > 0:
            shift_hydrogens(atom, -1)
            atom.SetFormalCharge(atom.GetFormalCharge() - 1)
            atom.UpdatePropertyCache(strict=False)
            logger.debug("Removed positive charge on atom %d", idx)

    sanitize(mol)
    return mol

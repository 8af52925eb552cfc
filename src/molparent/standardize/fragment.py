"""
Fragment handling: remove known salts and solvents, then pick the parent fragment.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from rdkit.Chem import MolToSmiles, rdMolDescriptors
from rdkit.Chem.rdchem import Mol

from molparent.errors import NoFragmentsRemainError
from molparent.standardize.graph import fragment_atom_indices, fragment_mols, keep_atoms, match_pattern, sanitize
from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters
from molparent.standardize.rules import FragmentPattern, get_rule_tables


logger = logging.getLogger(__name__)


def _exact_components(mol: Mol, pattern: Mol, components: Sequence[Tuple[int, ...]], candidates: Sequence[int]) -> List[int]:
    """Indices of the candidate components that one match of pattern covers completely."""
    n_atoms = pattern.GetNumAtoms()
    sized = [i for i in candidates if len(components[i]) == n_atoms]
    if not sized:
        return []
    matched: Set[FrozenSet[int]] = {frozenset(m) for m in match_pattern(mol, pattern)}
    return [i for i in sized if frozenset(components[i]) in matched]


def remove_fragments(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[FragmentPattern]] = None,
    leave_last: bool = True,
) -> Mol:
    """Remove every component that a fragment definition matches exactly.

    Definitions are applied in table order. With leave_last, a definition that
    would remove everything that is left is not applied and removal stops.
    """
    if rules is None:
        rules = get_rule_tables(params).fragments
    if mol.GetNumAtoms() == 0:
        raise NoFragmentsRemainError("Cannot remove fragments from an empty molecule")

    components = fragment_atom_indices(mol)
    remaining = list(range(len(components)))

    for rule in rules:
        removed = _exact_components(mol, rule.pattern, components, remaining)
        if not removed:
            continue
        if len(removed) == len(remaining):
            if leave_last:
                logger.debug("Kept last fragment(s) matching %s", rule.name)
                break
            raise NoFragmentsRemainError(
                f"Removing '{rule.name}' leaves no fragments", context={"rule": rule.name}
            )
        remaining = [i for i in remaining if i not in removed]
        logger.debug("Removed %d fragment(s): %s", len(removed), rule.name)

    return sanitize(keep_atoms(mol, [idx for i in remaining for idx in components[i]]))


def _fragment_key(frag: Mol, position: int, prefer_organic: bool):
    frag.UpdatePropertyCache(strict=False)
    organic = any(atom.GetAtomicNum() == 6 for atom in frag.GetAtoms())
    n_atoms = sum(1 + atom.GetTotalNumHs() for atom in frag.GetAtoms())
    mass = rdMolDescriptors.CalcExactMolWt(frag)
    smiles = MolToSmiles(frag)
    # Sorted ascending: preferred fragments first
    return (-int(organic and prefer_organic), -n_atoms, -round(mass, 6), smiles, position)


def choose_largest_fragment(mol: Mol, prefer_organic: bool = False) -> Mol:
    """Keep the largest component: organic first (optional), then atom count with H, mass, SMILES."""
    components = fragment_atom_indices(mol)
    if not components:
        raise NoFragmentsRemainError("Cannot choose a fragment from an empty molecule")
    if len(components) == 1:
        return sanitize(keep_atoms(mol, components[0]))

    keys = [_fragment_key(frag, i, prefer_organic) for i, frag in enumerate(fragment_mols(mol))]
    best = min(keys)
    logger.debug("Chose fragment %s", best[3])
    return sanitize(keep_atoms(mol, components[best[-1]]))

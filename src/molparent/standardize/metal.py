"""
Metal disconnector: break covalent bonds between metals and organic atoms.

The bond order moves onto the formal charges (metal up, ligand down), so
[Na]OC(=O)C becomes [Na+].CC(=O)[O-]. Dative bonds are broken without any
charge change.
"""

from __future__ import annotations

import logging

from rdkit import Chem
from rdkit.Chem.rdchem import BondType, Mol

from molparent.constants import SMARTS_METAL_NOF, SMARTS_METAL_NON
from molparent.standardize.graph import match_pattern, sanitize_partial


logger = logging.getLogger(__name__)

METAL_PATTERNS = (
    Chem.MolFromSmarts(SMARTS_METAL_NOF),
    Chem.MolFromSmarts(SMARTS_METAL_NON),
)


def disconnect_metals(mol: Mol) -> Mol:
    for pattern in METAL_PATTERNS:
        pairs = match_pattern(mol, pattern)
        if not pairs:
            continue

        rwmol = Chem.RWMol(mol)
        for metal_idx, ligand_idx in pairs:
            bond = rwmol.GetBondBetweenAtoms(metal_idx, ligand_idx)
            if bond is None:
                continue
            dative = bond.GetBondType() in (BondType.DATIVE, BondType.DATIVEL, BondType.DATIVER)
            order = 0 if dative else int(bond.GetBondTypeAsDouble())
            rwmol.RemoveBond(metal_idx, ligand_idx)

            metal = rwmol.GetAtomWithIdx(metal_idx)
            ligand = rwmol.GetAtomWithIdx(ligand_idx)
            metal.SetFormalCharge(metal.GetFormalCharge() + order)
            ligand.SetFormalCharge(ligand.GetFormalCharge() - order)
            logger.debug("Removed covalent bond between %s and %s", metal.GetSymbol(), ligand.GetSymbol())

        mol = rwmol.GetMol()
        sanitize_partial(mol)

    return mol

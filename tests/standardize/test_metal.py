"""Tests for the metal disconnector."""
import pytest
from rdkit import Chem


@pytest.mark.parametrize("smiles, expected", [
    ("CC(=O)O[Na]", "CC(=O)[O-].[Na+]"),
    ("Cl[Fe]Cl", "[Cl-].[Cl-].[Fe+2]"),
    ("CCO", "CCO"),
])
def test_disconnect_metals(smiles, expected, parse, canon):
    from molparent.standardize.metal import disconnect_metals

    assert Chem.MolToSmiles(disconnect_metals(parse(smiles))) == canon(expected)


def test_charge_is_conserved(parse):
    from molparent.standardize.metal import disconnect_metals

    mol = parse("[O-]C(=O)C[Zn]CC(=O)[O-]")
    result = disconnect_metals(parse("CC(=O)O[Mg]OC(C)=O"))

    assert Chem.GetFormalCharge(result) == 0
    assert len(Chem.GetMolFrags(result)) == 3
    assert Chem.GetFormalCharge(disconnect_metals(mol)) == Chem.GetFormalCharge(mol)


def test_dative_bond_carries_no_charge(parse, canon):
    from molparent.standardize.metal import disconnect_metals

    result = disconnect_metals(parse("[NH3]->[Pt]"))

    assert Chem.MolToSmiles(result) == canon("N.[Pt]")
    assert all(atom.GetFormalCharge() == 0 for atom in result.GetAtoms())

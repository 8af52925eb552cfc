"""Tests for the reionizer and the uncharger."""
import pytest
from rdkit import Chem


def _mol(smiles):
    return Chem.MolFromSmiles(smiles)


def test_strongest_acid_keeps_the_charge(canon):
    from molparent.standardize.reionize import reionize

    mol = _mol("C1=C(C=CC(=C1)[S]([O-])=O)[S](O)(=O)=O")
    result = reionize(mol)

    assert Chem.MolToSmiles(result) == canon("O=S(O)c1ccc(S(=O)(=O)[O-])cc1")
    assert Chem.GetFormalCharge(result) == Chem.GetFormalCharge(mol)


def test_phenolate_takes_the_carboxylic_proton(canon):
    from molparent.standardize.reionize import reionize

    result = reionize(_mol("OC(=O)c1ccc([O-])cc1"))

    assert Chem.MolToSmiles(result) == canon("O=C([O-])c1ccc(O)cc1")
    assert Chem.GetFormalCharge(result) == -1


@pytest.mark.parametrize("smiles", ["CC(=O)O", "CC(=O)[O-]", "Oc1ccccc1", "c1ccccc1"])
def test_nothing_to_move(smiles):
    from molparent.standardize.reionize import reionize

    assert Chem.MolToSmiles(reionize(_mol(smiles))) == Chem.MolToSmiles(_mol(smiles))


def test_reionize_leaves_input_alone():
    from molparent.standardize.reionize import reionize

    mol = _mol("OC(=O)c1ccc([O-])cc1")
    before = Chem.MolToSmiles(mol)
    reionize(mol)

    assert Chem.MolToSmiles(mol) == before


def test_custom_acid_base_table(canon):
    from molparent.standardize.reionize import reionize
    from molparent.standardize.rules import build_records

    # Only phenol is known, so there is nothing stronger to move a proton from
    pairs = build_records("acidbase", [("phenol", "c[OH]", "c[O-]")])
    result = reionize(_mol("OC(=O)c1ccc([O-])cc1"), rules=pairs)

    assert Chem.MolToSmiles(result) == canon("OC(=O)c1ccc([O-])cc1")


@pytest.mark.parametrize("smiles, expected", [
    ("CC(=O)[O-]", "CC(=O)O"),
    ("C[NH3+]", "CN"),
    ("C[NH3+].CC(=O)[O-]", "CN.CC(=O)O"),
    ("[O-]c1ccccc1", "Oc1ccccc1"),
])
def test_uncharge(smiles, expected, canon):
    from molparent.standardize.reionize import uncharge

    assert Chem.MolToSmiles(uncharge(_mol(smiles))) == canon(expected)


def test_uncharge_keeps_zwitterion_with_quaternary_nitrogen(canon):
    from molparent.standardize.reionize import uncharge

    assert Chem.MolToSmiles(uncharge(_mol("C[N+](C)(C)CC(=O)[O-]"))) == canon("C[N+](C)(C)CC(=O)[O-]")


def test_uncharge_balances_quaternary_nitrogen():
    from molparent.standardize.reionize import uncharge

    result = uncharge(_mol("C[N+](C)(C)C.CC(=O)[O-].CC(=O)[O-]"))
    smiles = Chem.MolToSmiles(result)

    assert Chem.GetFormalCharge(result) == 0
    assert smiles.count("[O-]") == 1
    assert "[N+]" in smiles

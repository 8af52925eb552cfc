"""Tests for tautomer enumeration, scoring and the canonical tautomer."""
from dataclasses import replace

import pytest
from rdkit import Chem


def _mol(smiles):
    return Chem.MolFromSmiles(smiles)


def test_enumerate_keto_enol(canon):
    from molparent.standardize.tautomer import enumerate_tautomers

    result = enumerate_tautomers(_mol("CC(=O)CC(C)=O"))

    assert result.completed
    assert canon("CC(=O)CC(C)=O") in result.smiles
    assert canon("CC(O)=CC(C)=O") in result.smiles
    assert len(result) >= 3
    assert result.transforms_applied > 0
    assert result.modified_atoms
    # The input comes first
    assert result.smiles[0] == canon("CC(=O)CC(C)=O")


def test_enumeration_from_either_form_is_the_same():
    from molparent.standardize.tautomer import enumerate_tautomers

    keto = enumerate_tautomers(_mol("CC(=O)CC(C)=O"))
    enol = enumerate_tautomers(_mol("CC(O)=CC(C)=O"))

    assert sorted(keto.smiles) == sorted(enol.smiles)


def test_no_tautomers(canon):
    from molparent.standardize.tautomer import enumerate_tautomers

    result = enumerate_tautomers(_mol("CCOCC"))

    assert result.smiles == [canon("CCOCC")]
    assert result.transforms_applied == 0
    assert result.completed


def test_tautomer_limit():
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import STATUS_MAX_TAUTOMERS, enumerate_tautomers

    result = enumerate_tautomers(_mol("CC(=O)CC(C)=O"), replace(DEFAULT_CLEANUP_PARAMS, max_tautomers=2))

    assert result.status == STATUS_MAX_TAUTOMERS
    assert not result.completed
    assert len(result) == 2


def test_transform_limit():
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import STATUS_MAX_TRANSFORMS, enumerate_tautomers

    result = enumerate_tautomers(_mol("CC(=O)CC(C)=O"), replace(DEFAULT_CLEANUP_PARAMS, max_transforms=1))

    assert result.status == STATUS_MAX_TRANSFORMS
    assert result.transforms_applied == 1
    assert len(result) <= 2


def test_stereocentre_on_a_tautomer_site_is_removed():
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import enumerate_tautomers

    mol = _mol("CC[C@@H](C)C=O")

    stripped = enumerate_tautomers(mol)
    assert not any("@" in smi for smi in stripped.smiles)

    kept = enumerate_tautomers(mol, replace(DEFAULT_CLEANUP_PARAMS, tautomer_remove_sp3_stereo=False))
    assert any("@" in smi for smi in kept.smiles)


def test_stereocentre_elsewhere_is_kept():
    from molparent.standardize.tautomer import canonical_tautomer

    result = Chem.MolToSmiles(canonical_tautomer(_mol("C[C@@H](O)CCC(C)=O")))

    assert "@" in result


@pytest.mark.parametrize("smiles, score", [
    ("c1ccccc1", 250),
    ("c1ccncc1", 100),
    ("CC(C)=O", 5),
    ("CS", 0),
])
def test_score_tautomer(smiles, score):
    from molparent.standardize.tautomer import score_tautomer

    assert score_tautomer(_mol(smiles)) == score


@pytest.mark.parametrize("smiles", ["CC(=O)CC(C)=O", "CC(O)=CC(C)=O", "C=C(O)CC(C)=O"])
def test_canonical_tautomer_prefers_the_diketone(smiles, canon):
    from molparent.standardize.tautomer import canonical_tautomer

    assert Chem.MolToSmiles(canonical_tautomer(_mol(smiles))) == canon("CC(=O)CC(C)=O")


def test_canonical_tautomer_keeps_aromatic_ring(canon):
    from molparent.standardize.tautomer import canonical_tautomer

    assert Chem.MolToSmiles(canonical_tautomer(_mol("Oc1ccccc1"))) == canon("Oc1ccccc1")


def test_bond_stereo_on_a_tautomer_site_is_removed(canon):
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import enumerate_tautomers

    mol = _mol("C/C=C/O")

    stripped = enumerate_tautomers(mol)
    assert canon("CCC=O") in stripped.smiles
    assert not any("/" in smi or "\\" in smi for smi in stripped.smiles)

    kept = enumerate_tautomers(mol, replace(DEFAULT_CLEANUP_PARAMS, tautomer_remove_bond_stereo=False))
    assert canon("C/C=C/O") in kept.smiles


def test_isotopic_hydrogen_on_a_donor(canon):
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import enumerate_tautomers

    mol = _mol("[2H]OC(C)=CC(C)=O")

    # The deuterium becomes an ordinary hydrogen that can move
    removed = enumerate_tautomers(mol)
    assert canon("CC(=O)CC(C)=O") in removed.smiles
    assert not any("[2H]" in smi for smi in removed.smiles)

    kept = enumerate_tautomers(mol, replace(DEFAULT_CLEANUP_PARAMS, tautomer_remove_isotopic_hs=False))
    assert all("[2H]" in smi for smi in kept.smiles)
    assert canon("CC(=O)CC(C)=O") not in kept.smiles


def test_stereo_is_reassigned_from_the_conformer():
    from rdkit.Chem import AllChem
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
    from molparent.standardize.tautomer import canonical_tautomer

    mol = Chem.AddHs(_mol("C[C@@H](O)CC"))
    assert AllChem.EmbedMolecule(mol, randomSeed=7) == 0
    mol = Chem.RemoveHs(mol)
    Chem.RemoveStereochemistry(mol)
    assert mol.GetConformer().Is3D()

    assert "@" in Chem.MolToSmiles(canonical_tautomer(mol))

    flat = canonical_tautomer(mol, replace(DEFAULT_CLEANUP_PARAMS, tautomer_reassign_stereo=False))
    assert "@" not in Chem.MolToSmiles(flat)

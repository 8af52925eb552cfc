"""Tests for the normalizer."""
from rdkit import Chem


def test_sulfoxide_is_charge_separated(parse, canon):
    from molparent.standardize.normalize import normalize_with_report

    mol, report = normalize_with_report(parse("CS(C)=O"))

    assert Chem.MolToSmiles(mol) == canon("C[S+](C)[O-]")
    assert report.applied_rules == ["Sulfoxide to -S+(O-)-"]
    assert report.converged
    assert not report.oscillated


def test_hypervalent_nitro_and_azide(parse, canon):
    from molparent.standardize.normalize import normalize

    assert Chem.MolToSmiles(normalize(parse("CN(=O)=O"))) == canon("C[N+](=O)[O-]")
    assert Chem.MolToSmiles(normalize(parse("CN=N#N"))) == canon("CN=[N+]=[N-]")


def test_each_group_is_fixed_in_turn(parse, canon):
    from molparent.standardize.normalize import normalize_with_report

    mol, report = normalize_with_report(parse("CS(=O)CCS(C)=O"))

    assert Chem.MolToSmiles(mol) == canon("C[S+]([O-])CC[S+](C)[O-]")
    assert report.applied_rules == ["Sulfoxide to -S+(O-)-"] * 2
    assert report.restarts == 2


def test_restart_limit_stops_early(parse):
    from molparent.standardize.normalize import normalize_with_report
    from molparent.standardize.params import CleanupParameters

    mol, report = normalize_with_report(parse("CS(=O)CCS(C)=O"), CleanupParameters(max_restarts=1))

    assert len(report.applied_rules) == 1
    assert report.converged is False
    assert Chem.MolToSmiles(mol).count("[O-]") == 1


def test_restart_limit_covers_all_fragments(parse):
    from molparent.standardize.normalize import normalize_with_report
    from molparent.standardize.params import CleanupParameters

    mol, report = normalize_with_report(parse("CS(C)=O.CS(C)=O.CS(C)=O"), CleanupParameters(max_restarts=2))

    assert report.restarts == 2
    assert len(report.applied_rules) == 2
    assert report.converged is False
    assert Chem.MolToSmiles(mol).count("[O-]") == 2


def test_fragments_are_normalized_separately(parse, canon):
    from molparent.standardize.normalize import normalize_with_report

    mol, report = normalize_with_report(parse("CS(C)=O.CCS(CC)=O"))

    assert Chem.MolToSmiles(mol) == canon("C[S+](C)[O-].CC[S+](CC)[O-]")
    assert len(report.applied_rules) == 2


def test_normalize_is_idempotent(parse):
    from molparent.standardize.normalize import normalize, normalize_with_report

    once = normalize(parse("CS(C)=O"))
    twice, report = normalize_with_report(once)

    assert Chem.MolToSmiles(twice) == Chem.MolToSmiles(once)
    assert report.applied_rules == []


def test_oscillating_rules_stop(parse):
    from molparent.standardize.normalize import normalize_with_report
    from molparent.standardize.rules import Normalization

    rules = [
        Normalization("alcohol to thiol", "[C:1][O:2]>>[C:1][S:2]"),
        Normalization("thiol to alcohol", "[C:1][S:2]>>[C:1][O:2]"),
    ]
    mol, report = normalize_with_report(parse("CO"), rules=rules)

    assert report.oscillated is True
    assert report.applied_rules == ["alcohol to thiol", "thiol to alcohol"]
    assert Chem.MolToSmiles(mol) == "CO"


def test_input_is_not_modified(parse):
    from molparent.standardize.normalize import normalize

    mol = Chem.MolFromSmiles("CS(C)=O")
    before = Chem.MolToSmiles(mol)
    normalize(mol)

    assert Chem.MolToSmiles(mol) == before

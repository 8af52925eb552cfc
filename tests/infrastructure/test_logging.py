import pytest


@pytest.fixture
def log_path(tmp_path, monkeypatch):
    from molparent import config

    path = tmp_path / "history.log"
    monkeypatch.setattr(config, "LOG_PATH", path)
    return path


def test_loggable_records_call(log_path):
    from molparent.infrastructure.logging import loggable

    @loggable
    def count_atoms(smiles: list[str], prefer_organic: bool = False) -> dict:
        """Count the SMILES strings.

        More detail that should not end up in the log.
        """
        return {"n": len(smiles)}

    assert count_atoms(["CCO", "CC"]) == {"n": 2}

    text = log_path.read_text(encoding="utf-8")
    assert "Function: count_atoms()" in text
    assert "Description: Count the SMILES strings." in text
    assert "More detail" not in text
    assert "'prefer_organic': 'False'" in text
    assert "Execution Time:" in text


def test_loggable_records_and_reraises_errors(log_path):
    from molparent.infrastructure.logging import loggable

    @loggable
    def broken(column_name: str):
        raise ValueError(f"Column {column_name} not found in dataset.")

    with pytest.raises(ValueError):
        broken("smiles")

    text = log_path.read_text(encoding="utf-8")
    assert "Function: broken()" in text
    assert "<raised ValueError: Column smiles not found in dataset.>" in text
    assert "Description: Description not available." in text


def test_loggable_keeps_function_name():
    from molparent.tools.cleaning.mol_cleaning import cleanup_smiles_dataset

    assert cleanup_smiles_dataset.__name__ == "cleanup_smiles_dataset"
    assert "Clean up SMILES" in cleanup_smiles_dataset.__doc__


def test_fmt_shortens_large_values():
    import pandas as pd
    from rdkit import Chem
    from molparent.infrastructure.logging import _fmt

    assert _fmt("CCO") == "CCO"
    assert _fmt("C" * 150).endswith("...")
    assert len(_fmt("C" * 150)) == 100
    assert _fmt(pd.DataFrame({"a": [1, 2]})) == "<Table shape=(2, 1)>"
    assert _fmt(list(range(50))) == "<list len=50>"
    assert _fmt(Chem.MolFromSmiles("CCO")) == "<Mol atoms=3>"

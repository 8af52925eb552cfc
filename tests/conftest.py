import os
import pytest
from pathlib import Path
import tempfile
import shutil
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

# Keep the history log out of the user's data directory
os.environ["MOLPARENT_DATA_DIR"] = tempfile.mkdtemp(prefix="molparent_test_data_")
os.environ.pop("MOLPARENT_CLEANUP_PARAMS", None)

from rdkit import Chem

from molparent.infrastructure.resources import create_project_manifest


@pytest.fixture(scope="session")
def session_workdir():
    d = Path(tempfile.mkdtemp())
    create_project_manifest(d, "test")
    try:
        yield d
    finally:
        shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def canon():
    """Canonical SMILES of a reference structure, for comparing against pipeline output."""
    def _canon(smiles: str) -> str:
        return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))
    return _canon


@pytest.fixture
def parse():
    """Parse SMILES without sanitization, the way the pipeline receives raw input."""
    def _parse(smiles: str):
        mol = Chem.MolFromSmiles(smiles, sanitize=False)
        assert mol is not None, smiles
        return mol
    return _parse

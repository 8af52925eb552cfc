from typing import Callable

from rdkit.Chem import MolFromSmiles, MolToSmiles
from rdkit.Chem.rdchem import Mol

from molparent.errors import StandardizationError
from molparent.standardize import parents
from molparent.standardize.params import CleanupParameters


def _parse_smiles(smi) -> Mol | None:
    """Parse without sanitization; cleanup sanitizes. None for anything unparsable."""
    if not isinstance(smi, str) or not smi.strip():
        return None
    return MolFromSmiles(smi, sanitize=False)


def _run_on_smiles(smi: str, operation: Callable[[Mol, CleanupParameters], Mol], params: CleanupParameters) -> tuple[str, str]:
    """Apply one standardization operation to a SMILES string. Return (canonical SMILES, comment)."""
    mol = _parse_smiles(smi)
    if mol is None:
        return None, "Failed: Invalid SMILES string"

    try:
        result = operation(mol, params)
    except (StandardizationError, ValueError, RuntimeError) as e:
        return None, f"Failed: {str(e)}"

    if result.GetNumAtoms() == 0:
        return None, "Failed: No atoms left"
    return MolToSmiles(result, canonical=True, isomericSmiles=True), "Passed"


def _cleanup_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.cleanup, params)


def _fragment_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.fragment_parent, params)


def _charge_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.charge_parent, params)


def _isotope_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.isotope_parent, params)


def _stereo_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.stereo_parent, params)


def _tautomer_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.tautomer_parent, params)


def _super_parent_smiles(smi: str, params: CleanupParameters) -> tuple[str, str]:
    return _run_on_smiles(smi, parents.super_parent, params)


def _enumerate_tautomers_smiles(smi: str, params: CleanupParameters) -> tuple[list[str], str]:
    """Sorted tautomer SMILES of one structure, and a comment. Truncated enumerations still pass."""
    if _parse_smiles(smi) is None:
        return None, "Failed: Invalid SMILES string"
    try:
        return parents.enumerate_tautomer_smiles(smi, params), "Passed"
    except (StandardizationError, ValueError, RuntimeError) as e:
        return None, f"Failed: {str(e)}"

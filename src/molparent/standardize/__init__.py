"""Rule-driven standardization engine and parent structure operations."""

from molparent.standardize.params import (
    DEFAULT_CLEANUP_PARAMS,
    CleanupParameters,
    cleanup_params_from_file,
    update_cleanup_params_from_json,
)
from molparent.standardize.parents import (
    canonical_tautomer,
    charge_parent,
    cleanup,
    enumerate_tautomer_smiles,
    enumerate_tautomers,
    fragment_parent,
    isotope_parent,
    normalize,
    reionize,
    remove_fragments,
    standardize_smiles,
    stereo_parent,
    super_parent,
    tautomer_parent,
)

"""
Normalizer: rewrite functional groups into one canonical representation.

Rules are tried in declaration order. Each time a rule fires the scan restarts
from the first rule, until a full pass changes nothing or ``max_restarts``
rewrites have been made. The budget is shared by all fragments of a molecule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from rdkit.Chem.rdchem import Mol

from molparent.standardize.graph import (
    canonical_signature,
    combine_fragments,
    count_chemistry_problems,
    fragment_mols,
    sanitize_partial,
    try_sanitize_partial,
)
from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters
from molparent.standardize.rules import Normalization, get_rule_tables


logger = logging.getLogger(__name__)


@dataclass
class NormalizationReport:
    applied_rules: List[str] = field(default_factory=list)
    restarts: int = 0
    converged: bool = True
    oscillated: bool = False


def _apply_rule(
    mol: Mol, rule: Normalization, current_sig: str, max_problems: int, do_canonical: bool
) -> Optional[Tuple[Mol, str, int]]:
    """Run one rule; return a product that differs from the input and is no less valid, or None.

    Products are sanitized without the valence check and accepted when they
    have at most as many valence problems as the input, so a molecule with two
    nitro groups is fixed one group at a time.
    """
    candidates = {}
    for products in rule.transform.RunReactants((mol,)):
        product = products[0]
        if not try_sanitize_partial(product):
            continue
        problems = count_chemistry_problems(product)
        if problems > max_problems:
            continue
        sig = canonical_signature(product)
        if sig == current_sig:
            continue
        if not do_canonical:
            return product, sig, problems
        candidates.setdefault(sig, (product, problems))

    if not candidates:
        return None
    best = min(candidates)
    product, problems = candidates[best]
    return product, best, problems


def _normalize_fragment(
    mol: Mol,
    rules: Sequence[Normalization],
    params: CleanupParameters,
    report: NormalizationReport,
    budget: int,
) -> Mol:
    current = mol
    current_sig = canonical_signature(current)
    problems = count_chemistry_problems(current)
    seen = {current_sig}

    for _ in range(budget):
        for rule in rules:
            result = _apply_rule(current, rule, current_sig, problems, params.do_canonical)
            if result is not None:
                break
        else:
            return current

        current, current_sig, problems = result
        report.applied_rules.append(rule.name)
        report.restarts += 1
        logger.debug("Rule applied: %s -> %s", rule.name, current_sig)

        if current_sig in seen:
            report.oscillated = True
            logger.warning("Normalization oscillates at %s, stopping", current_sig)
            return current
        seen.add(current_sig)

    if any(_apply_rule(current, rule, current_sig, problems, params.do_canonical) for rule in rules):
        report.converged = False
        logger.warning("Gave up normalization after %d restarts", params.max_restarts)
    return current


def normalize_with_report(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[Normalization]] = None,
) -> Tuple[Mol, NormalizationReport]:
    """Normalize every fragment and return the result with a record of what was applied."""
    if rules is None:
        rules = get_rule_tables(params).normalizations

    report = NormalizationReport()
    fragments = []
    for frag in fragment_mols(mol):
        sanitize_partial(frag)
        budget = params.max_restarts - report.restarts
        fragments.append(_normalize_fragment(frag, rules, params, report, budget))

    return sanitize_partial(combine_fragments(fragments)), report


def normalize(
    mol: Mol,
    params: CleanupParameters = DEFAULT_CLEANUP_PARAMS,
    rules: Optional[Sequence[Normalization]] = None,
) -> Mol:
    normalized, _ = normalize_with_report(mol, params, rules)
    return normalized

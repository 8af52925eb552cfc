"""
Rule tables: normalizations, acid/base pairs, fragment patterns and tautomer transforms.

Records are small frozen dataclasses that compile their SMARTS/SMIRKS when
constructed, so a table is validated once at configuration time and reused
read-only by every pipeline call. Table order is significant and always kept
exactly as declared.

Rule-file format (one record per line)::

    # comment (lines starting with '//' are comments too)
    Nitro to N+(O-)=O<TAB>[N;X3:1](=[O:2])=[O:3]>>[*+1:1]([*-1:2])=[*:3]

Fields are tab separated. A line without tabs is split on whitespace from the
right, so only the name may contain spaces.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

from rdkit.Chem import MolFromSmarts
from rdkit.Chem.rdChemReactions import ChemicalReaction, ReactionFromSmarts
from rdkit.Chem.rdchem import BondType, Mol

from molparent.constants import (
    ACID_BASE_PAIRS,
    FRAGMENT_PATTERNS,
    NORMALIZATIONS,
    TAUTOMER_SCORES,
    TAUTOMER_TRANSFORMS,
)
from molparent.errors import PatternError, RuleParseError
from molparent.standardize.graph import quiet_rdkit


BOND_SYMBOLS = {
    '-': BondType.SINGLE,
    '=': BondType.DOUBLE,
    '#': BondType.TRIPLE,
    ':': BondType.AROMATIC,
}
CHARGE_SYMBOLS = {'+': 1, '0': 0, '-': -1}


def _compile_smarts(name: str, smarts: str) -> Mol:
    with quiet_rdkit():
        pattern = MolFromSmarts(smarts)
    if pattern is None:
        raise PatternError(f"Invalid SMARTS for rule '{name}': {smarts}", context={"name": name})
    return pattern


def _compile_reaction(name: str, smirks: str) -> ChemicalReaction:
    try:
        with quiet_rdkit():
            rxn = ReactionFromSmarts(smirks)
    except ValueError as e:
        raise PatternError(f"Invalid SMIRKS for rule '{name}': {smirks}", context={"name": name}) from e
    if rxn.GetNumReactantTemplates() != 1 or rxn.GetNumProductTemplates() != 1:
        raise PatternError(
            f"Normalization '{name}' must have one reactant and one product: {smirks}",
            context={"name": name},
        )
    rxn.Initialize()
    return rxn


@dataclass(frozen=True)
class Normalization:
    name: str
    smirks: str
    transform: ChemicalReaction = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "transform", _compile_reaction(self.name, self.smirks))


@dataclass(frozen=True)
class AcidBasePair:
    name: str
    acid_smarts: str
    base_smarts: str
    acid: Mol = field(init=False, repr=False, compare=False)
    base: Mol = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "acid", _compile_smarts(self.name, self.acid_smarts))
        object.__setattr__(self, "base", _compile_smarts(self.name, self.base_smarts))


@dataclass(frozen=True)
class FragmentPattern:
    name: str
    smarts: str
    pattern: Mol = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", _compile_smarts(self.name, self.smarts))


@dataclass(frozen=True)
class TautomerTransform:
    """Hydrogen shift from the first to the last atom of a matched path.

    ``bonds`` holds one symbol per path bond (``-``, ``=``, ``#``, ``:``); when
    empty each bond toggles between single and double. ``charges`` holds one
    formal charge change per matched atom (``+``, ``-``, ``0``).
    """

    name: str
    smarts: str
    bonds: str = ''
    charges: str = ''
    pattern: Mol = field(init=False, repr=False, compare=False)
    bond_types: Tuple[BondType, ...] = field(init=False, repr=False, compare=False)
    charge_deltas: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        pattern = _compile_smarts(self.name, self.smarts)
        n_atoms = pattern.GetNumAtoms()
        if n_atoms < 2:
            raise PatternError(f"Tautomer transform '{self.name}' needs at least two atoms: {self.smarts}")

        unknown = [s for s in self.bonds if s not in BOND_SYMBOLS] + [s for s in self.charges if s not in CHARGE_SYMBOLS]
        if unknown:
            raise RuleParseError(f"Tautomer transform '{self.name}' has unknown symbols: {''.join(unknown)}")
        if self.bonds and len(self.bonds) != n_atoms - 1:
            raise RuleParseError(
                f"Tautomer transform '{self.name}' gives {len(self.bonds)} bond types for {n_atoms - 1} bonds"
            )
        if self.charges and len(self.charges) != n_atoms:
            raise RuleParseError(
                f"Tautomer transform '{self.name}' gives {len(self.charges)} charges for {n_atoms} atoms"
            )

        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "bond_types", tuple(BOND_SYMBOLS[s] for s in self.bonds))
        object.__setattr__(self, "charge_deltas", tuple(CHARGE_SYMBOLS[s] for s in self.charges))


@dataclass(frozen=True)
class TautomerScore:
    name: str
    smarts: str
    score: int
    pattern: Mol = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", _compile_smarts(self.name, self.smarts))


RuleRecord = Union[Normalization, AcidBasePair, FragmentPattern, TautomerTransform]

# kind -> (record type, minimum fields, maximum fields)
RULE_KINDS = {
    'normalization': (Normalization, 2, 2),
    'acidbase': (AcidBasePair, 3, 3),
    'fragment': (FragmentPattern, 2, 2),
    'tautomer': (TautomerTransform, 2, 4),
}


def _kind_spec(kind: str):
    if kind not in RULE_KINDS:
        raise ValueError(f"kind must be one of {sorted(RULE_KINDS)}, got '{kind}'")
    return RULE_KINDS[kind]


def build_records(kind: str, rows: Iterable[Sequence[str]]) -> Tuple[RuleRecord, ...]:
    """Build compiled records of one kind from pre-parsed string tuples, keeping their order."""
    record_type, min_fields, max_fields = _kind_spec(kind)
    records = []
    for i, row in enumerate(rows):
        row = tuple(row)
        if not min_fields <= len(row) <= max_fields:
            raise RuleParseError(
                f"{kind} record {i} has {len(row)} fields, expected "
                + (f"{min_fields}" if min_fields == max_fields else f"{min_fields} to {max_fields}"),
                context={"record": row},
            )
        records.append(record_type(*row))
    return tuple(records)


_TAUTOMER_SYMBOLS = set(BOND_SYMBOLS) | set(CHARGE_SYMBOLS)


def _split_line(line: str, kind: str, max_fields: int) -> list[str]:
    if '\t' in line:
        return [f.strip() for f in re.split(r'\t+', line) if f.strip()]
    # Only the name may hold spaces; patterns never do.
    if kind != 'tautomer':
        return line.rsplit(None, max_fields - 1)

    # Optional bonds/charges fields are made of symbols only, the SMARTS is the last token with atoms in it
    tokens = line.split()
    last = len(tokens) - 1
    while last > 0 and set(tokens[last]) <= _TAUTOMER_SYMBOLS:
        last -= 1
    name = ' '.join(tokens[:last])
    return ([name] if name else []) + tokens[last:]


def parse_rule_lines(lines: Iterable[str], kind: str) -> Tuple[RuleRecord, ...]:
    """Parse rule-file lines of one kind into compiled records."""
    record_type, min_fields, max_fields = _kind_spec(kind)
    records = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith('#') or line.startswith('//'):
            continue
        fields = _split_line(line, kind, max_fields)
        if not min_fields <= len(fields) <= max_fields:
            raise RuleParseError(
                f"Line {lineno}: {kind} records need "
                + (f"{min_fields}" if min_fields == max_fields else f"{min_fields} to {max_fields}")
                + f" fields, found {len(fields)}",
                context={"line": lineno, "text": line},
            )
        try:
            records.append(record_type(*fields))
        except PatternError as e:
            raise PatternError(f"Line {lineno}: {e}", context={"line": lineno, "text": line}) from e
    return tuple(records)


def parse_rule_file(path: Union[str, Path], kind: str) -> Tuple[RuleRecord, ...]:
    """Read a rule file from disk, see parse_rule_lines."""
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Rule file not found: {path}")
    with path.open('r', encoding='utf-8') as f:
        return parse_rule_lines(f, kind)


@dataclass(frozen=True)
class RuleTables:
    normalizations: Tuple[Normalization, ...]
    acid_base_pairs: Tuple[AcidBasePair, ...]
    fragments: Tuple[FragmentPattern, ...]
    tautomer_transforms: Tuple[TautomerTransform, ...]
    tautomer_scores: Tuple[TautomerScore, ...]


def _resolve(kind: str, inline_rows, file_path, defaults) -> Tuple[RuleRecord, ...]:
    if inline_rows:
        return build_records(kind, inline_rows)
    if file_path:
        return parse_rule_file(file_path, kind)
    return build_records(kind, defaults)


@lru_cache(maxsize=32)
def get_rule_tables(params=None) -> RuleTables:
    """Compile (once per parameter value) the rule tables named by CleanupParameters.

    Each table comes from the inline data when given, else from the rule
    file, else from the built-in defaults in molparent.constants.
    """
    if params is None:
        from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS
        params = DEFAULT_CLEANUP_PARAMS

    return RuleTables(
        normalizations=_resolve('normalization', params.normalization_data, params.normalizations, NORMALIZATIONS),
        acid_base_pairs=_resolve('acidbase', params.acidbase_data, params.acidbase_file, ACID_BASE_PAIRS),
        fragments=_resolve('fragment', params.fragment_data, params.fragment_file, FRAGMENT_PATTERNS),
        tautomer_transforms=_resolve(
            'tautomer', params.tautomer_transform_data, params.tautomer_transforms, TAUTOMER_TRANSFORMS
        ),
        tautomer_scores=tuple(TautomerScore(*row) for row in TAUTOMER_SCORES),
    )

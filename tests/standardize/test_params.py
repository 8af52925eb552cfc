"""Tests for CleanupParameters and JSON loading."""
import json
from dataclasses import replace

import pytest


def test_defaults():
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS as p

    assert p.max_restarts == 200
    assert p.prefer_organic is False
    assert p.do_canonical is True
    assert p.max_tautomers == 1000
    assert p.max_transforms == 1000
    assert p.tautomer_remove_sp3_stereo and p.tautomer_remove_bond_stereo
    assert p.tautomer_remove_isotopic_hs and p.tautomer_reassign_stereo
    assert p.normalizations is None and p.normalization_data == ()


def test_update_from_json_returns_new_params():
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, update_cleanup_params_from_json

    params = update_cleanup_params_from_json(
        DEFAULT_CLEANUP_PARAMS, '{"maxRestarts": 5, "preferOrganic": true, "tautomerRemoveSp3Stereo": false}'
    )

    assert params.max_restarts == 5
    assert params.prefer_organic is True
    assert params.tautomer_remove_sp3_stereo is False
    # Untouched values keep their defaults and the original is unchanged
    assert params.max_tautomers == 1000
    assert DEFAULT_CLEANUP_PARAMS.max_restarts == 200


def test_inline_data_from_json():
    from molparent.standardize.params import cleanup_params_from_json
    from molparent.standardize.rules import get_rule_tables

    doc = {
        "normalizationData": [{"name": "Nitro", "smarts": "[N;X3:1](=[O:2])=[O:3]>>[*+1:1]([*-1:2])=[*:3]"}],
        "acidbaseData": [{"name": "-CO2H", "acid": "C(=O)[OH]", "base": "C(=O)[O-]"}],
        "fragmentData": [{"name": "chloride", "smarts": "[Cl]"}],
        "tautomerTransformData": [{"name": "keten/ynol f", "smarts": "[C!H0]=[C]=[O]", "bonds": "#-"}],
    }
    params = cleanup_params_from_json(json.dumps(doc))

    assert params.acidbase_data == (("-CO2H", "C(=O)[OH]", "C(=O)[O-]"),)
    assert params.tautomer_transform_data == (("keten/ynol f", "[C!H0]=[C]=[O]", "#-"),)

    tables = get_rule_tables(params)
    assert [r.name for r in tables.normalizations] == ["Nitro"]
    assert [r.name for r in tables.acid_base_pairs] == ["-CO2H"]
    assert [r.name for r in tables.fragments] == ["chloride"]
    assert tables.tautomer_transforms[0].bonds == "#-"


@pytest.mark.parametrize("text", [
    '{"maxRestart": 5}',
    '{"maxTautomers": 0}',
    '{"maxTransforms": -3}',
    '{"maxRestarts": 2.5}',
    '{"preferOrganic": "yes"}',
    '{"fragmentData": [{"name": "x"}]}',
    '{"fragmentData": [{"name": "x", "smarts": "[Cl]", "extra": 1}]}',
    '[1, 2]',
    '{not json',
])
def test_bad_documents_raise_config_error(text):
    from molparent.errors import ConfigError
    from molparent.standardize.params import cleanup_params_from_json

    with pytest.raises(ConfigError):
        cleanup_params_from_json(text)


def test_bounds_are_checked_on_construction():
    from molparent.errors import ConfigError
    from molparent.standardize.params import DEFAULT_CLEANUP_PARAMS, CleanupParameters

    with pytest.raises(ConfigError):
        CleanupParameters(max_restarts=0)
    with pytest.raises(ValueError):
        replace(DEFAULT_CLEANUP_PARAMS, max_tautomers=-1)


def test_params_from_file(tmp_path):
    from molparent.errors import ConfigError
    from molparent.standardize.params import cleanup_params_from_file

    path = tmp_path / "params.json"
    path.write_text('{"doCanonical": false, "maxTautomers": 10}', encoding="utf-8")

    params = cleanup_params_from_file(path)
    assert params.do_canonical is False
    assert params.max_tautomers == 10

    with pytest.raises(ConfigError):
        cleanup_params_from_file(tmp_path / "missing.json")


def test_to_dict_feeds_back_into_the_loader():
    from molparent.standardize.params import CleanupParameters, cleanup_params_from_json, cleanup_params_to_dict

    params = CleanupParameters(max_restarts=12, fragment_data=(("chloride", "[Cl]"),))
    doc = cleanup_params_to_dict(params)

    assert doc["maxRestarts"] == 12
    assert doc["fragmentData"] == [{"name": "chloride", "smarts": "[Cl]"}]
    assert cleanup_params_from_json(json.dumps(doc)) == params


def test_params_are_hashable():
    from molparent.standardize.params import CleanupParameters

    assert hash(CleanupParameters(acidbase_data=(("a", "C[OH]", "C[O-]"),)))


def test_config_reads_params_from_environment(tmp_path, monkeypatch):
    from molparent import config

    path = tmp_path / "env_params.json"
    path.write_text('{"preferOrganic": true}', encoding="utf-8")
    monkeypatch.setenv("MOLPARENT_CLEANUP_PARAMS", str(path))

    assert config.get_default_cleanup_params().prefer_organic is True

    monkeypatch.delenv("MOLPARENT_CLEANUP_PARAMS")
    assert config.get_default_cleanup_params().prefer_organic is False

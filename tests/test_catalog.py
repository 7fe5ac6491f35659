import pytest

from gradepoint import RULE_SETS, UnknownRuleSetError, build_catalog, get_rule_set, list_rule_sets
from gradepoint.catalog import STANDARD
from gradepoint.config import DEFAULT_RULE_SET_ID

EXPECTED_IDS = {
    "standard-4.0-plus-minus",
    "lsac-4.33",
    "lsac-4.33-weighted",
    "weighted-high-school",
    "ucla-4.0-no-plus-a",
    "pharmacy-pharmd",
    "graduate-4.0",
    "amcas-bcpm",
    "nursing-prerequisite",
    "pa-school",
    "veterinary",
}


def test_catalog_contents():
    assert set(RULE_SETS) == EXPECTED_IDS
    assert DEFAULT_RULE_SET_ID in RULE_SETS


def test_ids_match_keys():
    for rs_id, rs in RULE_SETS.items():
        assert rs.id == rs_id


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        RULE_SETS["mine"] = STANDARD


def test_get_rule_set_unknown():
    with pytest.raises(UnknownRuleSetError) as exc:
        get_rule_set("nope")
    assert exc.value.rule_set_id == "nope"
    assert "standard-4.0-plus-minus" in exc.value.available


def test_list_rule_sets_sorted():
    ids = [rs_id for rs_id, _ in list_rule_sets()]
    assert ids == sorted(EXPECTED_IDS)


def test_build_catalog_rejects_duplicates():
    with pytest.raises(ValueError):
        build_catalog([STANDARD, STANDARD])


def test_custom_catalog_lookup():
    catalog = build_catalog([STANDARD])
    assert get_rule_set(STANDARD.id, catalog) is STANDARD
    with pytest.raises(UnknownRuleSetError):
        get_rule_set("lsac-4.33", catalog)


def test_profiles_use_expected_scales():
    assert get_rule_set("lsac-4.33").scale.max_points == 4.33
    assert get_rule_set("ucla-4.0-no-plus-a").scale.points["A+"] == 4.0
    assert not get_rule_set("pa-school").scale.is_graded("D-")
    assert get_rule_set("ucla-4.0-no-plus-a").unit_system == "quarter"

# tests/test_merge.py
from ecolepro.utils.merge import merge_records


def test_overlay_wins_for_plain_fields():
    merged = merge_records({"a": 1, "b": 2}, {"b": 3, "c": 4})
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_preserved_fields_keep_base_value():
    base = {"name": "Old", "subjects": ["Maths"]}
    merged = merge_records(base, {"name": "New", "subjects": []}, preserve=("subjects",))
    assert merged == {"name": "New", "subjects": ["Maths"]}


def test_preserved_field_missing_from_base_stays_missing():
    merged = merge_records({"name": "Old"}, {"subjects": ["SVT"]}, preserve=("subjects",))
    assert "subjects" not in merged


def test_inputs_are_not_mutated():
    base = {"config": {"pin": "0000"}, "tags": ["x"]}
    overlay = {"tags": ["y"]}
    merged = merge_records(base, overlay, preserve=("config",))
    merged["config"]["pin"] = "9999"
    merged["tags"].append("z")
    assert base == {"config": {"pin": "0000"}, "tags": ["x"]}
    assert overlay == {"tags": ["y"]}


def test_none_inputs():
    assert merge_records(None, None) == {}
    assert merge_records(None, {"a": 1}) == {"a": 1}

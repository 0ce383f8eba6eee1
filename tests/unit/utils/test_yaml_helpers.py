import pytest

from montyhall.utils.yaml_helpers import expand_dotted_keys


def test_expand_dotted_keys_nests_sections():
    assert expand_dotted_keys({"sim.n_games": 10, "sim.seed": 3}) == {
        "sim": {"n_games": 10, "seed": 3}
    }


def test_expand_dotted_keys_merges_with_plain_sections():
    data = {"io": {"append_seed": False}, "io.results_dir": "out"}
    assert expand_dotted_keys(data) == {"io": {"append_seed": False, "results_dir": "out"}}


def test_expand_dotted_keys_inside_nested_mapping():
    assert expand_dotted_keys({"sim": {"a.b": 1}}) == {"sim": {"a": {"b": 1}}}


def test_expand_dotted_keys_conflict_raises():
    with pytest.raises(TypeError, match="non-mapping"):
        expand_dotted_keys({"sim": 5, "sim.n_games": 10})


def test_expand_dotted_keys_ignores_bare_dot():
    assert expand_dotted_keys({".": 1, "plain": 2}) == {"plain": 2}

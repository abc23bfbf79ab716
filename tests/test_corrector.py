# tests/test_corrector.py
import math

import pytest

from typo_lookup.core.corrector import TypoCorrector
from typo_lookup.core.cost_model import UnitCostModel
from typo_lookup.core.probability import PoissonTailModel
from typo_lookup.utils.config_manager import Config


@pytest.fixture
def tc(identifiers):
    t = TypoCorrector()
    t.load(identifiers)
    return t


def test_suggest_is_sorted_and_excludes_query(tc):
    out = tc.suggest("aplpe", limit=10)
    words = [w for w, _ in out]
    assert words[0] == "apple"
    probs = [p for _, p in out]
    assert probs == sorted(probs, reverse=True)
    assert "aplpe" not in words


def test_suggest_respects_limit(tc):
    assert len(tc.suggest("appl", limit=2)) <= 2


def test_suggest_exact_word_excluded(tc):
    assert "size" not in [w for w, _ in tc.suggest("size")]


def test_bad_query_params(tc):
    with pytest.raises(ValueError):
        tc.suggest("x", max_distance=-1.0)
    with pytest.raises(ValueError):
        tc.suggest("x", min_probability=1.0)


def test_load_names_resolves_payloads():
    tc = TypoCorrector(cost_model=UnitCostModel())
    tc.load_names([("list", "java.util.List"), ("list", "scala.List"), ("lisp", "Lisp")])
    out = tc.suggest("lsit", limit=5)
    assert ("java.util.List", pytest.approx(math.exp(-1.0))) in out
    assert ("scala.List", pytest.approx(math.exp(-1.0))) in out


def test_config_drives_models(tmp_path):
    cfg = Config(str(tmp_path / "cfg.json"))
    cfg.set("cost_model", "unit")
    cfg.set("probability_model", "poisson")
    tc = TypoCorrector(cfg)
    assert isinstance(tc.cost, UnitCostModel)
    assert isinstance(tc.prob, PoissonTailModel)


def test_suggest_many_matches_suggest(tc):
    queries = ["aplpe", "lsit", "sze", "eqauls"]
    assert tc.suggest_many(queries, workers=3) == [tc.suggest(q) for q in queries]


def test_stats_track_queries(tc):
    tc.suggest("lsit")
    s = tc.stats()
    assert s["words"] == 16
    assert s["queries"] == 1
    assert s["generation"] == 1
    assert s["last_search"]["visited"] > 0


def test_distance_and_contains(tc):
    assert tc.distance("apple", "aplpe") == pytest.approx(0.5)
    assert "apple" in tc
    assert "aplpe" not in tc


def test_query_counter_is_exact_across_workers(tc):
    queries = ["aplpe", "lsit", "sze", "eqauls", "getNmae", "hashcdoe"] * 20
    tc.suggest_many(queries, workers=8)
    assert tc.stats()["queries"] == len(queries)


def test_load_mapping_keeps_every_payload():
    tc = TypoCorrector(cost_model=UnitCostModel())
    # keys in any order; the index sorts them
    n = tc.load_mapping({"size": ["List.size", "Map.size"], "length": ["String.length"]})
    assert n == 2
    assert tc.stats()["generation"] == 1
    assert "size" in tc and "length" in tc
    out = tc.suggest("szie", limit=5)
    assert [payload for payload, _ in out] == ["List.size", "Map.size"]
    assert out[0][1] == pytest.approx(math.exp(-1.0))

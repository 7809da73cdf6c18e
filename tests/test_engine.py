import pytest

from common.errors import EngineStateError, NotFoundError
from ingestion import build_engine
from recommenders import Found, NotFound, RecommendationEngine


def test_collaborative_scenario(engine):
    assert engine.collaborative("user_1") == {"product_C"}
    assert engine.collaborative("user_2") == {"product_B"}


def test_content_based_scenario_without_third_shoe(engine):
    assert engine.content_based("user_1") == frozenset()
    # user_2 owns a shoe (A) and a hat (C); B is the only unvisited shoe
    assert engine.content_based("user_2") == {"product_B"}


def test_popularity_scenario(engine):
    assert engine.popularity() == ["product_A", "product_B", "product_C"]


def test_collaborative_via_multiple_co_visitors(larger_engine):
    assert larger_engine.collaborative("user_1") == {"product_C", "product_E"}
    assert larger_engine.collaborative("user_4") == frozenset()


def test_content_based_includes_attribute_only_products(larger_engine):
    # F is never interacted with but shares the shoes category
    assert larger_engine.content_based("user_1") == {"product_D", "product_F"}


def test_content_based_skips_products_without_attributes(larger_engine):
    result = larger_engine.content_based("user_3")
    assert result == {"product_B", "product_D", "product_F"}
    assert "product_E" not in result


def test_popularity_is_capped_and_ordered(larger_engine):
    top = larger_engine.popularity()
    counts = [larger_engine.popularity_index.count(p) for p in top]

    assert top == ["product_A", "product_C", "product_B", "product_D", "product_E"]
    assert len(top) <= 5
    assert counts == sorted(counts, reverse=True)


@pytest.mark.parametrize("user_id", ["user_1", "user_2", "user_3", "user_4"])
def test_strategies_never_return_visited_products(larger_engine, user_id):
    visited = larger_engine.visited(user_id)
    assert not larger_engine.collaborative(user_id) & visited
    assert not larger_engine.content_based(user_id) & visited


@pytest.mark.parametrize("user_id", ["user_1", "user_3"])
def test_content_based_results_all_have_attributes(larger_engine, user_id):
    for product_id in larger_engine.content_based(user_id):
        assert larger_engine.attribute_index.get(product_id) is not None


@pytest.mark.parametrize("user_id", ["user_1", "user_2", "user_3", "user_4"])
def test_every_recommended_product_is_a_graph_node(larger_engine, user_id):
    graph = larger_engine.graph
    for product_id in larger_engine.collaborative(user_id) | larger_engine.content_based(user_id):
        assert graph.contains(product_id)
        assert graph.role(product_id) == "product"


def test_catalog_only_product_becomes_a_graph_node():
    engine = build_engine(
        [("user_id", "product_id"), ("1", "A")],
        [
            ("product_id", "category", "price_range", "brand"),
            ("A", "shoes", "mid", "Acme"),
            ("D", "shoes", "high", "Stride"),
        ],
    )

    assert engine.content_based("user_1") == {"product_D"}
    assert engine.graph.contains("product_D")
    assert engine.graph.users_of("product_D") == set()
    assert engine.popularity_index.count("product_D") == 0


def test_unknown_user_raises_not_found(engine):
    with pytest.raises(NotFoundError):
        engine.collaborative("ghost")
    with pytest.raises(NotFoundError):
        engine.content_based("ghost")
    assert engine.popularity() == ["product_A", "product_B", "product_C"]


def test_lookup_returns_result_union(engine):
    found = engine.find_collaborative("user_1")
    missing = engine.find_content_based("ghost")

    assert isinstance(found, Found)
    assert found.data == {"product_C"}
    assert isinstance(missing, NotFound)
    assert missing.user_id == "ghost"


def test_repeated_interaction_keeps_edge_but_doubles_count():
    once = RecommendationEngine()
    once.add_interaction("user_1", "product_A")
    once.freeze()

    twice = RecommendationEngine()
    twice.add_interaction("user_1", "product_A")
    twice.add_interaction("user_1", "product_A")
    twice.freeze()

    assert once.graph.neighbors("user_1") == twice.graph.neighbors("user_1")
    assert twice.popularity_index.count("product_A") == 2 * once.popularity_index.count("product_A")


def test_empty_engine_popularity_is_empty():
    engine = RecommendationEngine().freeze()
    assert engine.popularity() == []


def test_popularity_k_is_configurable():
    engine = RecommendationEngine({"popularity_k": 2})
    engine.add_interaction("user_1", "product_B")
    engine.add_interaction("user_2", "product_A")
    engine.add_interaction("user_3", "product_A")
    engine.freeze()
    assert engine.popularity() == ["product_A", "product_B"]


def test_queries_require_ready_state():
    engine = RecommendationEngine()
    engine.add_interaction("user_1", "product_A")
    with pytest.raises(EngineStateError):
        engine.collaborative("user_1")
    with pytest.raises(EngineStateError):
        engine.popularity()


def test_mutations_rejected_after_freeze(engine):
    assert engine.ready
    with pytest.raises(EngineStateError):
        engine.add_interaction("user_9", "product_Z")
    with pytest.raises(EngineStateError):
        engine.set_attributes("product_Z", {"category": "x", "price_range": "y", "brand": "z"})
    with pytest.raises(EngineStateError):
        engine.freeze()
    assert not engine.graph.contains("user_9")


def test_recommend_known_user_is_sorted(larger_engine):
    products, strategy = larger_engine.recommend("user_1", "collaborative")
    assert strategy == "collaborative"
    assert products == ["product_C", "product_E"]

    products, strategy = larger_engine.recommend("user_1", "content")
    assert strategy == "content"
    assert products == ["product_D", "product_F"]


def test_recommend_falls_back_to_popularity(engine):
    assert engine.recommend("ghost") == (["product_A", "product_B", "product_C"], "popularity")
    assert engine.recommend(None) == (["product_A", "product_B", "product_C"], "popularity")


def test_recommend_rejects_unknown_strategy(engine):
    with pytest.raises(ValueError):
        engine.recommend("user_1", "random")

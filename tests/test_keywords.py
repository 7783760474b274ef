import math

import pytest

from lattice_segmenter import InvalidArgument, Keyword, KeywordMethod
from lattice_segmenter.models.graph import CooccurrenceGraph

ENGLISH = "the quick brown fox the quick fox"


@pytest.fixture
def english_engine(empty_engine):
    empty_engine.load_idf(b"quick 1.0\nfox 2.0")
    return empty_engine


def test_tfidf_weights_use_idf_and_median_fallback(english_engine):
    keywords = english_engine.extract_keywords(ENGLISH, top_k=3, method="tfidf")
    assert [keyword.term for keyword in keywords] == ["fox", "quick", "brown"]
    assert keywords[0].weight == pytest.approx(0.8)
    assert keywords[1].weight == pytest.approx(0.4)
    # brown 不在表中，取中位数 1.5
    assert keywords[2].weight == pytest.approx(0.3)


def test_tfidf_respects_top_k(english_engine):
    keywords = english_engine.extract_keywords(ENGLISH, top_k=2)
    assert keywords == [Keyword("fox", pytest.approx(0.8)), Keyword("quick", pytest.approx(0.4))]


def test_stop_words_are_case_insensitive(english_engine):
    english_engine.add_stop_word("FOX")
    terms = [keyword.term for keyword in english_engine.extract_keywords(ENGLISH.upper())]
    assert terms == ["QUICK", "BROWN"]
    english_engine.remove_stop_word("fox")
    assert "FOX" in [keyword.term for keyword in english_engine.extract_keywords(ENGLISH.upper())]


def test_stop_words_apply_to_both_methods(english_engine):
    english_engine.set_stop_words(["quick"])
    for method in KeywordMethod:
        terms = [keyword.term for keyword in english_engine.extract_keywords(ENGLISH, method=method)]
        assert "quick" not in terms
        assert "the" in terms


def test_allowed_pos_filters_candidates(toy_engine):
    toy_engine.load_idf("北京 3.0\n清华大学 5.0".encode("utf-8"))
    text = "北京清华大学北京"
    assert [keyword.term for keyword in toy_engine.extract_keywords(text)] == ["北京", "清华大学"]
    keywords = toy_engine.extract_keywords(text, allowed_pos={"ns"})
    assert keywords == [Keyword("北京", pytest.approx(3.0))]
    assert toy_engine.extract_keywords(text, allowed_pos="nt, nz") == [Keyword("清华大学", pytest.approx(5.0))]


def test_empty_idf_table_warns(toy_engine):
    with pytest.warns(RuntimeWarning):
        keywords = toy_engine.extract_keywords("北京清华大学")
    assert all(keyword.weight == 0.0 for keyword in keywords)


def test_textrank_ranks_cooccurring_terms(english_engine):
    keywords = english_engine.extract_keywords("alpha beta gamma alpha beta", method=KeywordMethod.textrank)
    assert [keyword.term for keyword in keywords] == ["alpha", "beta", "gamma"]
    assert keywords[0].weight == pytest.approx(keywords[1].weight)
    assert keywords[1].weight > keywords[2].weight


def test_textrank_without_edges_is_empty(toy_engine):
    assert toy_engine.extract_keywords("北京北京", method="textrank") == []


def test_textrank_graph_window(english_engine):
    extractor = english_engine.extractors[KeywordMethod.textrank]
    graph = extractor.build_graph(["a", None, "b", None, "c", None, "a", None, "b"])
    assert graph.get_edge("a", "b") == 3.0
    assert graph.get_edge("a", "c") == 2.0
    assert graph.get_edge("b", "c") == 2.0
    assert graph.vertices() == ["a", "b", "c"]


def test_textrank_single_edge_converges_to_one(english_engine):
    extractor = english_engine.extractors[KeywordMethod.textrank]
    graph = CooccurrenceGraph()
    graph.add_edge("x", "y")
    graph.add_edge("x", "x")
    assert len(graph) == 2
    weights = extractor.rank(graph)
    assert weights == {"x": pytest.approx(1.0), "y": pytest.approx(1.0)}


@pytest.mark.parametrize("method", list(KeywordMethod))
def test_keyword_results_are_bounded_and_sorted(english_engine, method):
    text = "alpha beta gamma delta alpha beta epsilon zeta eta theta alpha"
    keywords = english_engine.extract_keywords(text, top_k=4, method=method)
    assert 0 < len(keywords) <= 4
    assert len({keyword.term for keyword in keywords}) == len(keywords)
    weights = [keyword.weight for keyword in keywords]
    assert all(math.isfinite(weight) for weight in weights)
    assert weights == sorted(weights, reverse=True)


@pytest.mark.parametrize("top_k", [0, -1, 1.5, True])
def test_invalid_top_k_is_rejected(english_engine, top_k):
    with pytest.raises(InvalidArgument):
        english_engine.extract_keywords(ENGLISH, top_k=top_k)


def test_empty_text_yields_no_keywords(english_engine):
    assert english_engine.extract_keywords("") == []
    assert english_engine.extract_keywords("", method="textrank") == []

import math

import pytest

from lattice_segmenter import Engine, SegmenterConfig
from lattice_segmenter.core.hmm import HMMParameters, POSParameters, POSTagger, SegmentationHMM
from lattice_segmenter.storage.dictionary import Dictionary
from lattice_segmenter.storage.parser import parse_dictionary

TOY_DICT = """
# 测试用小词典
北京 100 ns
清华 50 nz
清华大学 80 nt
大学 60 n
我 200 r
来到 40 v
来 30 v
到 30 v
华大 5 j
大 20 a
学 20 v
""".encode("utf-8")


def _log(value):
    return math.log(value)


def toy_segmentation_model():
    start = {"B": _log(0.6), "S": _log(0.4), "M": -3.14e100, "E": -3.14e100}
    trans = {
        "B": {"E": _log(0.9), "M": _log(0.1)},
        "M": {"E": _log(0.6), "M": _log(0.4)},
        "E": {"B": _log(0.5), "S": _log(0.5)},
        "S": {"B": _log(0.5), "S": _log(0.5)},
    }
    emit = {
        "B": {"杭": _log(0.5), "大": _log(0.5)},
        "E": {"研": _log(0.5), "厦": _log(0.5)},
        "M": {},
        "S": {"走": _log(0.5)},
    }
    return SegmentationHMM(HMMParameters(start=start, trans=trans, emit=emit))


def toy_pos_tagger():
    bn, en, sv, sn = ("B", "n"), ("E", "n"), ("S", "v"), ("S", "n")
    start = {bn: _log(0.5), sv: _log(0.3), sn: _log(0.2)}
    trans = {
        bn: {en: 0.0},
        en: {sv: _log(0.7), sn: _log(0.1), bn: _log(0.2)},
        sv: {bn: _log(0.6), sv: _log(0.2), sn: _log(0.2)},
        sn: {bn: _log(0.5), sv: _log(0.5)},
    }
    emit = {
        bn: {"杭": _log(0.5), "大": _log(0.5)},
        en: {"研": _log(0.5), "厦": _log(0.5)},
        sv: {"走": _log(0.9)},
        sn: {"走": _log(0.1)},
    }
    char_states = {"走": (sv, sn)}
    return POSTagger(POSParameters(start=start, trans=trans, emit=emit, char_states=char_states))


@pytest.fixture
def toy_entries():
    return parse_dictionary(TOY_DICT)


@pytest.fixture
def toy_dictionary():
    return Dictionary(parse_dictionary(TOY_DICT), default_loader=lambda: parse_dictionary(TOY_DICT))


@pytest.fixture
def toy_engine():
    config = SegmenterConfig(load_default_dictionary=False, load_default_idf=False)
    dictionary = Dictionary(parse_dictionary(TOY_DICT), default_loader=lambda: parse_dictionary(TOY_DICT))
    return Engine(
        config,
        dictionary=dictionary,
        hmm_model=toy_segmentation_model(),
        pos_tagger=toy_pos_tagger(),
    )


@pytest.fixture
def empty_engine():
    config = SegmenterConfig(load_default_dictionary=False, load_default_idf=False)
    dictionary = Dictionary(default_loader=lambda: ())
    return Engine(
        config,
        dictionary=dictionary,
        hmm_model=toy_segmentation_model(),
        pos_tagger=toy_pos_tagger(),
    )


@pytest.fixture
def segmentation_model():
    return toy_segmentation_model()


@pytest.fixture
def pos_tagger():
    return toy_pos_tagger()

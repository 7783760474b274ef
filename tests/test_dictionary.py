import threading

import pytest

from lattice_segmenter.errors import InvalidArgument, LoadError, LockError
from lattice_segmenter.models.entry import DictEntry
from lattice_segmenter.storage.dictionary import Dictionary
from lattice_segmenter.storage.parser import parse_dictionary, parse_idf


def test_parse_dictionary_skips_comments_and_blank_lines():
    entries = parse_dictionary("\ufeff# 注释\n\n中文 100 n\n中 50\n".encode("utf-8"))
    assert entries == [DictEntry("中文", 100, "n"), DictEntry("中", 50, None)]


def test_parse_dictionary_rejects_non_numeric_frequency():
    with pytest.raises(LoadError) as excinfo:
        parse_dictionary(b"word abc tagX")
    assert excinfo.value.lineno == 1


@pytest.mark.parametrize("line", ["word", "word 1 n extra", "word -3", "word 1.5"])
def test_parse_dictionary_rejects_malformed_lines(line):
    with pytest.raises(LoadError):
        parse_dictionary(line.encode("utf-8"))


def test_parse_dictionary_rejects_invalid_utf8():
    with pytest.raises(LoadError):
        parse_dictionary(b"\xff\xfe 1")


def test_parse_idf():
    assert parse_idf(b"quick 1.0\nfox 2\n") == [("quick", 1.0), ("fox", 2.0)]
    with pytest.raises(LoadError):
        parse_idf(b"quick high")


def test_total_frequency_tracks_entries(toy_dictionary):
    assert toy_dictionary.total_frequency == 635
    assert toy_dictionary.max_word_length == 4
    assert toy_dictionary.frequency("北京") == 100
    assert toy_dictionary.tag("北京") == "ns"
    assert toy_dictionary.is_prefix("清华大")
    assert "清华大" not in toy_dictionary


def test_load_merges_and_keeps_existing_tag(toy_dictionary):
    merged = toy_dictionary.load("北京 300\n杭研 7 nz\n".encode("utf-8"))
    assert merged == 2
    assert toy_dictionary.frequency("北京") == 300
    assert toy_dictionary.tag("北京") == "ns"
    assert toy_dictionary.entry("杭研") == DictEntry("杭研", 7, "nz")
    assert toy_dictionary.total_frequency == 635 + 200 + 7


def test_malformed_load_leaves_dictionary_unchanged(toy_dictionary):
    before = (len(toy_dictionary), toy_dictionary.total_frequency)
    with pytest.raises(LoadError):
        toy_dictionary.load("新词 5\nword abc tagX\n".encode("utf-8"))
    assert (len(toy_dictionary), toy_dictionary.total_frequency) == before
    assert toy_dictionary.entry("新词") is None


def test_add_word_with_frequency_returns_stored_value(toy_dictionary):
    assert toy_dictionary.add_word("杭研", 1000, "nz") == 1000
    assert toy_dictionary.total_frequency == 1635
    assert toy_dictionary.tag("杭研") == "nz"


def test_add_word_without_frequency_uses_suggestion(toy_entries):
    # 清华(50) × 大学(60) / total(555) ≈ 5.4，整词至少需要 6
    entries = [entry for entry in toy_entries if entry.word != "清华大学"]
    dictionary = Dictionary(entries)
    assert dictionary.total_frequency == 555
    assert dictionary.suggest_freq("清华大学") == 6
    assert dictionary.add_word("清华大学") == 6


def test_add_word_keeps_higher_existing_frequency(toy_dictionary):
    assert toy_dictionary.suggest_freq("清华大学") == 5
    assert toy_dictionary.add_word("清华大学") == 80


def test_suggest_freq_does_not_mutate(toy_dictionary):
    before = (len(toy_dictionary), toy_dictionary.total_frequency)
    toy_dictionary.suggest_freq("杭研大厦")
    assert (len(toy_dictionary), toy_dictionary.total_frequency) == before


def test_add_word_rejects_bad_arguments(toy_dictionary):
    with pytest.raises(InvalidArgument):
        toy_dictionary.add_word("", 1)
    with pytest.raises(InvalidArgument):
        toy_dictionary.add_word("杭研", -1)
    with pytest.raises(InvalidArgument):
        toy_dictionary.suggest_freq("")


def test_delete_word_keeps_entry_with_zero_frequency(toy_dictionary):
    toy_dictionary.delete_word("清华")
    assert "清华" not in toy_dictionary
    assert toy_dictionary.is_deleted("清华")
    assert toy_dictionary.total_frequency == 585


def test_reset_restores_default_entries(toy_dictionary):
    toy_dictionary.add_word("杭研", 1000)
    toy_dictionary.reset()
    assert toy_dictionary.entry("杭研") is None
    assert toy_dictionary.total_frequency == 635


def test_lock_timeout_raises_lock_error(toy_dictionary):
    toy_dictionary.lock_timeout = 0.05
    acquired = threading.Event()
    release = threading.Event()

    def holder():
        with toy_dictionary.locked():
            acquired.set()
            release.wait(5)

    thread = threading.Thread(target=holder)
    thread.start()
    assert acquired.wait(5)
    try:
        with pytest.raises(LockError):
            toy_dictionary.add_word("杭研", 10)
    finally:
        release.set()
        thread.join()
    assert toy_dictionary.entry("杭研") is None

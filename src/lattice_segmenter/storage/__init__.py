"""存储层。"""

from __future__ import annotations

from ..config import SegmenterConfig
from .dictionary import Dictionary
from .parser import parse_dictionary, parse_idf
from .resources import default_dictionary_entries


def create_dictionary(config: SegmenterConfig) -> Dictionary:
    package, name = config.resource_package, config.dictionary_resource
    dictionary = Dictionary(
        lock_timeout=config.lock_timeout,
        default_loader=lambda: default_dictionary_entries(package, name),
    )
    if config.load_default_dictionary:
        dictionary.reset()
    return dictionary


__all__ = ["Dictionary", "create_dictionary", "parse_dictionary", "parse_idf"]

"""打包资源入口，基于 jieba 发行包自带的预训练数据。

默认词典、IDF 表与两套 HMM 参数表都是只读常量，每个进程只解析一次。
"""

from __future__ import annotations

import importlib
import logging
import time
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Tuple

from ..models.entry import DictEntry
from .parser import parse_dictionary, parse_idf

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE = "jieba"
DEFAULT_DICTIONARY = "dict.txt"
DEFAULT_IDF = "analyse/idf.txt"


def read_resource(package: str, name: str) -> bytes:
    target = resources.files(package)
    for part in name.split("/"):
        target = target.joinpath(part)
    return target.read_bytes()


@lru_cache(maxsize=None)
def default_dictionary_entries(
    package: str = DEFAULT_PACKAGE, name: str = DEFAULT_DICTIONARY
) -> Tuple[DictEntry, ...]:
    started = time.perf_counter()
    entries = tuple(parse_dictionary(read_resource(package, name), source=f"{package}/{name}"))
    logger.debug(
        "解析默认词典 %s/%s：%d 个词条，耗时 %.3f 秒",
        package,
        name,
        len(entries),
        time.perf_counter() - started,
    )
    return entries


@lru_cache(maxsize=None)
def default_idf_rows(package: str = DEFAULT_PACKAGE, name: str = DEFAULT_IDF) -> Tuple[Tuple[str, float], ...]:
    rows = tuple(parse_idf(read_resource(package, name), source=f"{package}/{name}"))
    logger.debug("解析默认 IDF 表 %s/%s：%d 行", package, name, len(rows))
    return rows


def _import_table(module_name: str) -> Any:
    return importlib.import_module(module_name).P


@lru_cache(maxsize=None)
def segmentation_tables(package: str = DEFAULT_PACKAGE) -> Tuple[Dict, Dict, Dict]:
    """四状态（B/M/E/S）切分模型：初始、转移、发射对数概率。"""

    return (
        _import_table(f"{package}.finalseg.prob_start"),
        _import_table(f"{package}.finalseg.prob_trans"),
        _import_table(f"{package}.finalseg.prob_emit"),
    )


@lru_cache(maxsize=None)
def pos_tables(package: str = DEFAULT_PACKAGE) -> Tuple[Dict, Dict, Dict, Dict[str, List]]:
    """词性模型：状态为 (位置, 词性) 二元组，另附“字 → 可能状态”表。"""

    return (
        _import_table(f"{package}.posseg.prob_start"),
        _import_table(f"{package}.posseg.prob_trans"),
        _import_table(f"{package}.posseg.prob_emit"),
        _import_table(f"{package}.posseg.char_state_tab"),
    )

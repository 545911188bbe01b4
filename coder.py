"""
Главный класс, выполняющий кодирование файла по Хаффману целиком.
"""

import time
from dataclasses import dataclass
from typing import Dict, Optional

from huffman import HuffmanHeap, Symbol, assign_codes, build_tree
from scanner import scan_input
from encoder import write_encoded
from report import CompressionStats, compute_statistics, format_report


SUCCESS_MESSAGE = "Successfully encoded file (time elapsed: {elapsed}ms)"
FAILURE_MESSAGE = "Input file error"


@dataclass
class EncodeResult:
    codes: Dict[Symbol, str]
    frequencies: Dict[Symbol, int]
    stats: CompressionStats
    bits_written: int
    elapsed_ms: int


def leaf_frequencies(heap: HuffmanHeap) -> Dict[Symbol, int]:
    return {node.symbol: node.freq for node in heap.nodes}


class HuffmanCoder:
    def __init__(self, encoding: Optional[str] = None, verbose: bool = True):
        self.encoding = encoding
        self.verbose = verbose

    def build_codes(self, heap: HuffmanHeap) -> Dict[Symbol, str]:
        # пустой вход: дерево не строится
        if heap.size() == 0:
            return {}

        return assign_codes(build_tree(heap))

    def encode_file(self, input_path: str, output_path: str) -> EncodeResult:
        start = time.perf_counter()

        heap = scan_input(input_path, self.encoding)
        frequencies = leaf_frequencies(heap)
        codes = self.build_codes(heap)
        stats = compute_statistics(frequencies, codes)

        if self.verbose:
            for line in format_report(frequencies, codes, stats):
                print(line)

        bits_written = write_encoded(input_path, output_path, codes, self.encoding)

        elapsed_ms = int((time.perf_counter() - start) * 1000)

        return EncodeResult(
            codes=codes,
            frequencies=frequencies,
            stats=stats,
            bits_written=bits_written,
            elapsed_ms=elapsed_ms
        )

    def run(self, input_path: str, output_path: str) -> str:
        """
        Кодирует input_path в output_path и возвращает строку состояния.

        Любая ошибка ввода-вывода или декодирования, на любом проходе,
        сообщается одинаково. Выходной файл к этому моменту может быть
        уже усечён.
        """
        try:
            result = self.encode_file(input_path, output_path)
        except (OSError, UnicodeError):
            return FAILURE_MESSAGE

        return SUCCESS_MESSAGE.format(elapsed=result.elapsed_ms)

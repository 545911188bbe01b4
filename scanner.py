"""
Подсчёт частот.

Читает входной поток до конца, считает каждый символ и складывает
по одному листу на символ в кучу для построения дерева.
"""

from collections import Counter
from typing import IO, Dict, Iterator, Optional

from huffman import HuffmanHeap, HuffmanNode, Symbol


CHUNK_SIZE = 64 * 1024


def open_input(path: str, encoding: Optional[str] = None) -> IO:
    # newline='' сохраняет CR и LF как есть
    if encoding is None:
        return open(path, 'rb')
    return open(path, 'r', encoding=encoding, newline='')


def read_symbols(stream: IO, chunk_size: int = CHUNK_SIZE) -> Iterator[Symbol]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield from chunk


def count_frequencies(stream: IO) -> Counter:
    return Counter(read_symbols(stream))


def scan_frequencies(path: str, encoding: Optional[str] = None) -> Counter:
    with open_input(path, encoding) as f:
        return count_frequencies(f)


def build_heap(frequencies: Dict[Symbol, int]) -> HuffmanHeap:
    """
    Вставляет по листу на символ в порядке возрастания символа,
    чтобы равные частоты разрешались одинаково при каждом запуске.
    """
    heap = HuffmanHeap()
    for symbol in sorted(frequencies):
        heap.insert(HuffmanNode(symbol, frequencies[symbol]))
    return heap


def scan_input(path: str, encoding: Optional[str] = None) -> HuffmanHeap:
    return build_heap(scan_frequencies(path, encoding))

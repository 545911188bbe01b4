"""
Второй проход: замена каждого входного символа его кодом Хаффмана.

Каждый бит пишется одним символом '0' или '1'. Вывод не упакован
и не содержит таблицы кодов, поэтому сам по себе не декодируется.
"""

from typing import IO, Dict, Iterable, Iterator, Optional

from huffman import Symbol
from scanner import open_input, read_symbols


def encode_symbols(symbols: Iterable[Symbol], codes: Dict[Symbol, str]) -> Iterator[str]:
    for symbol in symbols:
        yield codes[symbol]


def encode_stream(source: IO, sink: IO, codes: Dict[Symbol, str]) -> int:
    """
    Пишет в sink код каждого символа из source и возвращает число
    записанных битов.

    У каждого символа должен быть код. Отсутствующий код означает, что вход
    изменился после построения таблицы, и приводит к KeyError.
    """
    bits_written = 0
    for code in encode_symbols(read_symbols(source), codes):
        sink.write(code)
        bits_written += len(code)
    return bits_written


def write_encoded(input_path: str, output_path: str, codes: Dict[Symbol, str],
                  encoding: Optional[str] = None) -> int:
    with open_input(input_path, encoding) as source:
        with open(output_path, 'w', encoding='ascii', newline='') as sink:
            return encode_stream(source, sink, codes)

"""
Статистика сжатия и отчёт, выводимый в консоль после кодирования.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from huffman import Symbol


BITS_PER_SYMBOL = 8

MNEMONICS = {
    9: '[TAB]',
    10: '[LF]',
    13: '[CR]',
    32: '[SPACE]',
}


@dataclass
class CompressionStats:
    original_bits: int
    compressed_bits: int
    symbol_count: int
    total_symbols: int

    @property
    def ratio(self) -> float:
        if self.original_bits == 0:
            return 0.0
        return self.compressed_bits / self.original_bits

    @property
    def percent(self) -> float:
        # округление половины вверх до одного знака
        return math.floor(self.ratio * 1000 + 0.5) / 10


def compute_statistics(frequencies: Dict[Symbol, int], codes: Dict[Symbol, str]) -> CompressionStats:
    """
    Считается, что до кодирования каждый символ занимает 8 бит.
    """
    total_symbols = sum(frequencies.values())
    compressed_bits = sum(len(codes[symbol]) * freq for symbol, freq in frequencies.items())

    return CompressionStats(
        original_bits=BITS_PER_SYMBOL * total_symbols,
        compressed_bits=compressed_bits,
        symbol_count=len(frequencies),
        total_symbols=total_symbols
    )


def display_symbol(symbol: Optional[Symbol]) -> str:
    if symbol is None:
        return '[NULL]'

    value = symbol if isinstance(symbol, int) else ord(symbol)
    if value in MNEMONICS:
        return MNEMONICS[value]

    char = chr(value)
    if isinstance(symbol, int) and value > 126:
        return f'[0x{value:02X}]'
    if not char.isprintable():
        return f'[0x{value:02X}]'
    return char


def format_node(symbol: Optional[Symbol], freq: int) -> str:
    return f"{display_symbol(symbol)}: {freq}"


def format_report(frequencies: Dict[Symbol, int], codes: Dict[Symbol, str],
                  stats: CompressionStats) -> List[str]:
    lines = []

    for symbol in sorted(frequencies, key=lambda s: (frequencies[s], s)):
        lines.append(f"{format_node(symbol, frequencies[symbol])}: {codes[symbol]}")

    lines.append(f"Original size: {stats.original_bits} bits")
    lines.append(f"Compressed size: {stats.compressed_bits} bits ({stats.percent}% of original)")

    return lines

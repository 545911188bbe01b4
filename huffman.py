"""
Построение дерева Хаффмана и назначение кодов.
Частые символы получают короткие коды, редкие - длинные.
"""

from typing import Dict, List, Optional, Union

Symbol = Union[int, str]


class HuffmanNode:
    def __init__(self, symbol: Optional[Symbol] = None, freq: int = 0):
        self._symbol = symbol
        self._freq = freq
        self.left: Optional['HuffmanNode'] = None
        self.right: Optional['HuffmanNode'] = None

    @property
    def symbol(self) -> Optional[Symbol]:
        return self._symbol

    @property
    def freq(self) -> int:
        return self._freq

    def is_leaf(self) -> bool:
        return self._symbol is not None

    def __lt__(self, other):
        return self._freq < other.freq

    def __repr__(self):
        return f"HuffmanNode(symbol={self._symbol!r}, freq={self._freq})"


class HuffmanHeap:
    """
    Двоичная min-куча узлов, упорядоченная по частоте.

    Равные частоты дальше не упорядочиваются: какой из двух узлов выйдет
    первым, зависит только от их позиций в массиве.
    """

    def __init__(self):
        self.nodes: List[HuffmanNode] = []

    def insert(self, node: HuffmanNode):
        self.nodes.append(node)
        self._sift_up(len(self.nodes) - 1)

    def remove_min(self) -> HuffmanNode:
        """
        Удаляет и возвращает узел с наименьшей частотой.

        Куча не должна быть пустой, иначе IndexError.
        """
        if not self.nodes:
            raise IndexError("remove_min from empty heap")

        self._swap(0, len(self.nodes) - 1)
        node = self.nodes.pop()
        self._sift_down(0)
        return node

    def size(self) -> int:
        return len(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def _swap(self, i: int, j: int):
        self.nodes[i], self.nodes[j] = self.nodes[j], self.nodes[i]

    def _sift_up(self, child: int):
        while child > 0:
            parent = (child - 1) // 2
            # равные частоты не поднимаются
            if not self.nodes[child] < self.nodes[parent]:
                break
            self._swap(child, parent)
            child = parent

    def _sift_down(self, parent: int):
        size = len(self.nodes)
        child = 2 * parent + 1

        while child < size:
            if child + 1 < size and self.nodes[child + 1] < self.nodes[child]:
                child += 1

            if self.nodes[parent] < self.nodes[child]:
                break

            self._swap(parent, child)
            parent = child
            child = 2 * parent + 1


def merge_nodes(first: HuffmanNode, second: HuffmanNode) -> HuffmanNode:
    parent = HuffmanNode(freq=first.freq + second.freq)
    parent.left = first
    parent.right = second
    return parent


def build_tree(heap: HuffmanHeap) -> HuffmanNode:
    """
    Сливает два самых лёгких узла, пока не останется один, и возвращает его как корень.

    Куча расходуется. Куча из одного листа возвращает этот лист.
    Пустая куча - ошибка вызывающего кода, ValueError.
    """
    if heap.size() == 0:
        raise ValueError("Cannot build a Huffman tree from an empty heap")

    while heap.size() > 1:
        first = heap.remove_min()
        second = heap.remove_min()
        heap.insert(merge_nodes(first, second))

    return heap.remove_min()


def assign_codes(root: HuffmanNode) -> Dict[Symbol, str]:
    """
    Обходит дерево и сопоставляет каждому листу строку пути:
    '0' - левая ветвь, '1' - правая.

    Корень-лист (единственный символ) получает код '0'.
    """
    codes: Dict[Symbol, str] = {}

    if root.is_leaf():
        codes[root.symbol] = '0'
        return codes

    def traverse(node: HuffmanNode, code: str):
        if node.is_leaf():
            codes[node.symbol] = code
            return

        traverse(node.left, code + '0')
        traverse(node.right, code + '1')

    traverse(root, '')
    return codes

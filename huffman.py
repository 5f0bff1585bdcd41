from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from bitseq import Bit, BitParseError, BitSequence

log = logging.getLogger(__name__)


class HuffmanError(ValueError):
    pass


class SymbolNotFoundError(HuffmanError, LookupError):
    def __init__(self, symbol, symbols=()):
        super().__init__(f"symbol {symbol!r} is not in this tree's symbols {list(symbols)}")
        self.symbol = symbol


class MalformedTreeError(HuffmanError):
    # branch claims a symbol that neither child holds
    def __init__(self, symbol, branch):
        super().__init__(
            f"branch symbols {list(branch.symbols)} contain {symbol!r} but neither "
            f"left {list(branch.left.symbols)} nor right {list(branch.right.symbols)} does"
        )
        self.symbol = symbol
        self.branch = branch


class DuplicateSymbolError(HuffmanError):
    def __init__(self, symbol):
        super().__init__(f"symbol {symbol!r} appears more than once in the weight table")
        self.symbol = symbol


@dataclass(frozen=True)
class HuffmanLeaf: # one symbol and its weight
    symbol: Hashable
    weight: int

    @property
    def symbols(self) -> Tuple[Hashable, ...]:
        return (self.symbol,)


@dataclass(frozen=True)
class HuffmanBranch: # two owned subtrees, weight and symbols aggregated by merge()
    left: "HuffmanTree" = field(repr=False)
    right: "HuffmanTree" = field(repr=False)
    weight: int
    symbols: Tuple[Hashable, ...]
    symbol_set: FrozenSet[Hashable] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "symbol_set", frozenset(self.symbols))


HuffmanTree = Union[HuffmanLeaf, HuffmanBranch]


def make_leaf(symbol, weight: int) -> HuffmanLeaf:
    return HuffmanLeaf(symbol, weight)


def merge(left: HuffmanTree, right: HuffmanTree) -> HuffmanBranch:
    # left's symbols come first in the aggregated tuple
    return HuffmanBranch(
        left=left,
        right=right,
        weight=left.weight + right.weight,
        symbols=left.symbols + right.symbols,
    )


make_code_tree = merge


def tree_weight(tree: HuffmanTree) -> int:
    return tree.weight


def tree_symbols(tree: HuffmanTree) -> Tuple[Hashable, ...]:
    return tree.symbols


def build_huffman_tree(pairs: Union[Mapping, Iterable[Tuple[Hashable, int]]]) -> Optional[HuffmanTree]:
    """
    Greedy Huffman construction: repeatedly merge the two lightest trees.

    pairs is a dict of symbol -> weight or an iterable of (symbol, weight).
    Returns None for an empty table. Ties on weight go to the tree that entered
    the queue first, so a given input order always yields the same tree.
    Raises DuplicateSymbolError if a symbol is listed twice.
    """
    if isinstance(pairs, Mapping):
        pairs = pairs.items()

    counter = itertools.count()
    priority_queue = []
    seen = set()
    for symbol, weight in pairs:
        if symbol in seen:
            raise DuplicateSymbolError(symbol)
        seen.add(symbol)
        priority_queue.append((weight, next(counter), make_leaf(symbol, weight)))

    if not priority_queue:
        log.debug("empty weight table, no tree built")
        return None

    heapq.heapify(priority_queue)

    while len(priority_queue) > 1:
        _, _, left = heapq.heappop(priority_queue)
        _, _, right = heapq.heappop(priority_queue)
        merged = merge(left, right)
        heapq.heappush(priority_queue, (merged.weight, next(counter), merged))

    root = priority_queue[0][2]
    log.debug("built Huffman tree over %d symbols, total weight %d", len(root.symbols), root.weight)
    return root


build_from_weights = build_huffman_tree


def frequency_table(message: Iterable[Hashable]) -> Dict[Hashable, int]:
    ft: Dict[Hashable, int] = {}
    for s in message:
        ft[s] = ft.get(s, 0) + 1
    return ft


def decode(tree: Optional[HuffmanTree], bits: Iterable[Bit]) -> List[Hashable]:
    """
    Walk the tree one bit at a time: ZERO goes left, ONE goes right.

    Reaching a leaf emits its symbol and resets to the root. A trailing partial
    path is dropped. A root that is a leaf never emits, since no bit moves it.
    Items that are not Bit values (e.g. the characters of a "0101" string)
    raise BitParseError.
    """
    decoded = []
    if tree is None:
        return decoded

    current_node = tree
    for i, bit in enumerate(bits):
        if not isinstance(bit, Bit):
            # raw "0101" text has to go through parse_bits first
            raise BitParseError(bit, i)
        if isinstance(current_node, HuffmanBranch):
            current_node = current_node.left if bit == Bit.ZERO else current_node.right
            if isinstance(current_node, HuffmanLeaf):
                decoded.append(current_node.symbol)
                current_node = tree

    return decoded


def _holds(node: HuffmanTree, symbol) -> bool:
    if isinstance(node, HuffmanLeaf):
        return node.symbol == symbol
    return symbol in node.symbol_set


def _encode_symbol(tree: HuffmanTree, symbol, out: List[Bit]) -> None:
    node = tree
    if not _holds(node, symbol):
        raise SymbolNotFoundError(symbol, node.symbols)

    while isinstance(node, HuffmanBranch):
        if _holds(node.left, symbol):
            out.append(Bit.ZERO)
            node = node.left
        elif _holds(node.right, symbol):
            out.append(Bit.ONE)
            node = node.right
        else:
            raise MalformedTreeError(symbol, node)


def encode(tree: Optional[HuffmanTree], symbols: Sequence[Hashable]) -> BitSequence:
    """
    Concatenate the root-to-leaf path of every symbol.

    An empty message gives an empty BitSequence without looking at the tree.
    Raises SymbolNotFoundError for a symbol the tree does not hold and
    MalformedTreeError when a branch's symbols disagree with its children.
    """
    if not symbols:
        return BitSequence()
    if tree is None:
        raise SymbolNotFoundError(symbols[0])

    out: List[Bit] = []
    for s in symbols:
        _encode_symbol(tree, s, out)
    return BitSequence(out)


def iter_leaves(tree: HuffmanTree) -> Iterator[HuffmanLeaf]:
    stack = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, HuffmanLeaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def _walk_paths(tree: HuffmanTree) -> Iterator[Tuple[HuffmanLeaf, Tuple[Bit, ...]]]:
    stack = [(tree, ())]
    while stack:
        node, path = stack.pop()
        if isinstance(node, HuffmanLeaf):
            yield node, path
        else:
            stack.append((node.right, path + (Bit.ONE,)))
            stack.append((node.left, path + (Bit.ZERO,)))


def generate_huffman_codes(tree: HuffmanTree) -> Dict[Hashable, BitSequence]:
    # a lone root leaf gets the empty code, matching encode()
    return {leaf.symbol: BitSequence(path) for leaf, path in _walk_paths(tree)}


def code_lengths(tree: HuffmanTree) -> Dict[Hashable, int]:
    return {leaf.symbol: len(path) for leaf, path in _walk_paths(tree)}


def weighted_path_length(tree: Optional[HuffmanTree]) -> int:
    """Sum of weight * depth over all leaves; the cost Huffman minimises."""
    if tree is None:
        return 0
    return sum(leaf.weight * len(path) for leaf, path in _walk_paths(tree))

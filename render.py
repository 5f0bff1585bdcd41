"""
Human readable dumps of a Huffman tree, for debugging only

    ([A, B, C] 5)
    |-L:(A 3)
    |-R:([B, C] 2)
    |	|-L:(B 1)
    |	|-R:(C 1)
"""

from __future__ import annotations

from typing import List

from huffman import HuffmanLeaf, HuffmanTree, generate_huffman_codes


def _render(node: HuffmanTree, depth: int, out: List[str]) -> None:
    if isinstance(node, HuffmanLeaf):
        out.append(f"({node.symbol} {node.weight})")
        return

    indent = "|\t" * depth
    out.append(f"([{', '.join(str(s) for s in node.symbols)}] {node.weight})\n{indent}|-L:")
    _render(node.left, depth + 1, out)
    out.append(f"\n{indent}|-R:")
    _render(node.right, depth + 1, out)


def render_tree(tree: HuffmanTree) -> str:
    out: List[str] = []
    _render(tree, 0, out)
    return "".join(out)


def render_codes(tree: HuffmanTree) -> str:
    return "\n".join(f"{sym}\t{code}" for sym, code in generate_huffman_codes(tree).items())

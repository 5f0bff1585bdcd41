"""
Bit sequences for the Huffman codec

Thin adapter between human readable "0101" strings and the tuple of Bit
values that encode() produces and decode() consumes.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator, Tuple, Union


class Bit(IntEnum):
    ZERO = 0
    ONE = 1

    def __str__(self) -> str:
        return "1" if self is Bit.ONE else "0"


_CHAR_TO_BIT = {"0": Bit.ZERO, "1": Bit.ONE}


class BitParseError(ValueError):
    def __init__(self, char, position: int):
        super().__init__(f"{char!r} at position {position} is not '0' or '1'")
        self.char = char
        self.position = position


def _to_bits(values: Iterable[Union[Bit, int]]) -> Tuple[Bit, ...]:
    # Bit members or plain 0/1 ints; bools and anything else are rejected
    out = []
    for i, v in enumerate(values):
        if isinstance(v, Bit):
            out.append(v)
        elif isinstance(v, int) and not isinstance(v, bool) and v in (0, 1):
            out.append(Bit(v))
        else:
            raise BitParseError(v, i)
    return tuple(out)


class BitSequence:
    """Immutable ordered run of Bit values."""

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[Union[Bit, int]] = ()):
        self._bits: Tuple[Bit, ...] = _to_bits(bits)

    @classmethod
    def parse(cls, text: str) -> "BitSequence":
        out = []
        for i, ch in enumerate(text):
            bit = _CHAR_TO_BIT.get(ch)
            if bit is None:
                raise BitParseError(ch, i)
            out.append(bit)
        return cls(out)

    @classmethod
    def from_bits(cls, values: Iterable[Union[Bit, int]]) -> "BitSequence":
        return cls(values)

    def format(self) -> str:
        return "".join("1" if b is Bit.ONE else "0" for b in self._bits)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"BitSequence('{self.format()}')"

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[Bit]:
        return iter(self._bits)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BitSequence(self._bits[index])
        return self._bits[index]

    def __add__(self, other: "BitSequence") -> "BitSequence":
        if not isinstance(other, BitSequence):
            return NotImplemented
        return BitSequence(self._bits + other._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitSequence):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)


def parse_bits(text: str) -> BitSequence:
    return BitSequence.parse(text)


def format_bits(bits: BitSequence) -> str:
    return bits.format()

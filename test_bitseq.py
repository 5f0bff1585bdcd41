import pytest

from bitseq import Bit, BitParseError, BitSequence, format_bits, parse_bits


def test_parse_format_literal():
    bits = parse_bits("011001011")
    assert format_bits(bits) == "011001011"
    assert str(bits) == "011001011"
    assert list(bits)[:3] == [Bit.ZERO, Bit.ONE, Bit.ONE]


@pytest.mark.parametrize("text", ["", "0", "1", "10", "0000", "1111111", "0101100111000"])
def test_format_parse_inverse(text):
    assert parse_bits(text).format() == text
    assert len(parse_bits(text)) == len(text)


def test_empty_string_gives_empty_sequence():
    assert parse_bits("") == BitSequence()
    assert len(BitSequence.parse("")) == 0


@pytest.mark.parametrize("text,char,position", [("012", "2", 2), ("a", "a", 0), ("01 1", " ", 2)])
def test_parse_rejects_other_characters(text, char, position):
    with pytest.raises(BitParseError) as info:
        parse_bits(text)
    assert info.value.char == char
    assert info.value.position == position
    assert isinstance(info.value, ValueError)


def test_from_bits_accepts_ints_and_bits():
    assert BitSequence.from_bits([0, 1, Bit.ONE]) == parse_bits("011")
    with pytest.raises(BitParseError):
        BitSequence.from_bits([0, 2])
    with pytest.raises(BitParseError):
        BitSequence.from_bits(["1"])


def test_constructor_normalises_ints():
    direct = BitSequence([1, 0, 1])
    checked = BitSequence.from_bits([1, 0, 1])
    assert direct == checked
    assert direct.format() == checked.format() == "101"
    assert all(isinstance(b, Bit) for b in direct)
    with pytest.raises(BitParseError):
        BitSequence([True, 0])
    with pytest.raises(BitParseError):
        BitSequence("01")


def test_sequence_is_immutable_value():
    a = parse_bits("01")
    b = parse_bits("10")
    joined = a + b
    assert joined.format() == "0110"
    assert a.format() == "01"
    assert a == parse_bits("01") and hash(a) == hash(parse_bits("01"))
    assert joined[1:3] == parse_bits("11")
    assert joined[0] is Bit.ZERO
    with pytest.raises(AttributeError):
        a.foo = 1

from huffman import build_huffman_tree, make_leaf, merge
from render import render_codes, render_tree


def test_render_leaf():
    assert render_tree(make_leaf("A", 8)) == "(A 8)"


def test_render_nested_branch():
    tree = merge(make_leaf("A", 3), merge(make_leaf("B", 1), make_leaf("C", 1)))
    assert render_tree(tree) == (
        "([A, B, C] 5)\n"
        "|-L:(A 3)\n"
        "|-R:([B, C] 2)\n"
        "|\t|-L:(B 1)\n"
        "|\t|-R:(C 1)"
    )


def test_render_codes_one_line_per_leaf():
    tree = build_huffman_tree([("A", 8), ("B", 3), ("C", 1)])
    lines = render_codes(tree).splitlines()
    assert len(lines) == 3
    codes = dict(line.split("\t") for line in lines)
    assert codes["A"] == "1"
    assert sorted(codes.values()) == ["00", "01", "1"]

import csv

import pytest

import experiments
from huffman import weighted_path_length


def test_demo_prints_round_trip(capsys):
    assert experiments.main(["demo"]) == 0
    out = capsys.readouterr().out
    assert "encode ['A', 'E', 'D'] -> 011001011" in out
    assert "decode 011001011 -> ['A', 'E', 'D']" in out
    assert "parse/format '011001011' -> '011001011'" in out
    assert "hand-built 41, greedy 41" in out
    assert out.startswith("([A, B, C, D, E, F, G, H] 17)")


def test_demo_bad_bits_halts(capsys):
    assert experiments.main(["demo", "--bits", "0121"]) == 1
    assert "error:" in capsys.readouterr().out


def test_demo_unknown_symbol_halts(capsys):
    assert experiments.main(["demo", "--message", "A Z"]) == 1
    assert "'Z'" in capsys.readouterr().out


def test_textbook_tree_is_optimal():
    assert weighted_path_length(experiments.textbook_tree()) == 41


@pytest.mark.parametrize("name", sorted(experiments.GENERATOR_REGISTRY))
def test_generators_make_positive_tables(name):
    table = experiments.generate_table(name, 16, seed=1)
    assert 1 <= len(table) <= 16
    assert all(w > 0 for w in table.values())


def test_unknown_generator_rejected():
    with pytest.raises(ValueError):
        experiments.generate_table("nope", 4, seed=0)


def test_dyadic_table_meets_entropy():
    weights = experiments.gen_dyadic(6)
    row = experiments.run_one(weights, experiments.sample_message(weights, 100, seed=3))
    assert row.avg_code_len == pytest.approx(row.entropy_bits)
    assert row.correctness_ok == 1


def test_bench_writes_csv(tmp_path, capsys):
    argv = [
        "bench", "--outdir", str(tmp_path), "--runs", "2", "--alphabets", "2,8",
        "--generators", "uniform,zipf", "--message_len", "50", "--no_plots",
    ]
    assert experiments.main(argv) == 0

    with (tmp_path / "metrics.csv").open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2 * 2 * 2
    assert all(r["correctness_ok"] == "1" for r in rows)
    assert all(float(r["redundancy_bits"]) >= -1e-9 for r in rows)

    with (tmp_path / "summary.csv").open(newline="") as f:
        summary = list(csv.DictReader(f))
    assert len(summary) == 4
    assert all(s["n_runs"] == "2" for s in summary)
    assert "Correctness rate across all runs: 1.000" in capsys.readouterr().out
    assert not list(tmp_path.glob("*.png"))


def test_bench_plots(tmp_path):
    argv = [
        "bench", "--outdir", str(tmp_path), "--runs", "1", "--alphabets", "4,16",
        "--generators", "english_like", "--message_len", "20",
    ]
    assert experiments.main(argv) == 0
    assert (tmp_path / "build_time.png").exists()
    assert (tmp_path / "code_length_english_like.png").exists()


@pytest.mark.parametrize("alphabets", ["0", "2,0", "-4", "two", ""])
def test_bench_rejects_bad_alphabet_sizes(tmp_path, capsys, alphabets):
    with pytest.raises(SystemExit) as info:
        experiments.main(["bench", "--outdir", str(tmp_path), "--alphabets", alphabets, "--no_plots"])
    assert info.value.code == 2
    assert "--alphabets" in capsys.readouterr().err
    assert not (tmp_path / "metrics.csv").exists()


def test_bench_rejects_unknown_generator(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        experiments.main(["bench", "--outdir", str(tmp_path), "--generators", "uniform,nope"])
    assert info.value.code == 2
    assert "nope" in capsys.readouterr().err


def test_alphabet_list_parses_sizes():
    assert experiments.alphabet_list("1, 4,16") == [1, 4, 16]

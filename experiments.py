# Jacob Mitchell, Kyle Axtell
# CS 456 - Data Compression
# experiments.py
# 10/19/26

"""
Huffman prefix-code demo and experiments

demo   builds the textbook A..H tree by hand, prints it, then encodes and
       decodes a short message through it
bench  builds trees from synthetic weight tables of growing alphabet size,
       encodes/decodes a random message through each and records timings,
       average code length vs entropy, and round-trip correctness

Outputs of bench (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts, unless --no_plots)

How to run:
  python experiments.py demo
  python experiments.py demo --message "A E D" --bits 011001011
  python experiments.py bench --outdir results --runs 5
  python experiments.py bench --runs 3 --alphabets 2,8,64,256 --generators uniform,zipf
"""

from __future__ import annotations

import argparse
import csv
import logging
import math
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

from bitseq import BitParseError, parse_bits
from huffman import (
    HuffmanError,
    build_huffman_tree,
    decode,
    encode,
    make_leaf,
    merge,
    weighted_path_length,
)
from render import render_codes, render_tree


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def entropy_bits(weights: Dict[str, int]) -> float:
    total = sum(weights.values())
    if total <= 0:
        return 0.0
    h = 0.0
    for w in weights.values():
        if w > 0:
            p = w / total
            h -= p * math.log2(p)
    return h


# Demo

DEMO_TABLE = [("A", 8), ("B", 3), ("C", 1), ("D", 1), ("E", 1), ("F", 1), ("G", 1), ("H", 1)]

def textbook_tree():
    return merge(
        make_leaf("A", 8),
        merge(
            merge(make_leaf("B", 3), merge(make_leaf("C", 1), make_leaf("D", 1))),
            merge(
                merge(make_leaf("E", 1), make_leaf("F", 1)),
                merge(make_leaf("G", 1), make_leaf("H", 1)),
            ),
        ),
    )


def run_demo(message: List[str], bits_text: str) -> None:
    tree = textbook_tree()
    print(render_tree(tree))
    print()

    encoded = encode(tree, message)
    print(f"encode {message} -> {encoded}")
    print(f"decode {encoded} -> {decode(tree, encoded)}")

    bits = parse_bits(bits_text)
    print(f"parse/format {bits_text!r} -> {bits.format()!r}")
    print(f"decode {bits} -> {decode(tree, bits)}")
    print()

    built = build_huffman_tree(DEMO_TABLE)
    print("Greedy tree from the same weights:")
    print(render_codes(built))
    print(f"weighted path length: hand-built {weighted_path_length(tree)}, "
          f"greedy {weighted_path_length(built)}")


# Synthetic weight-table generators

def gen_uniform(alphabet: int, seed: int = 0) -> Dict[str, int]:
    rng = random.Random(seed)
    return {f"s{i}": rng.randint(90, 110) for i in range(alphabet)}

def gen_zipf_like(alphabet: int, s: float = 1.2, seed: int = 0) -> Dict[str, int]:
    rng = random.Random(seed)
    ranks = list(range(alphabet))
    rng.shuffle(ranks)
    return {f"s{i}": max(1, round(10_000 / ((r + 1) ** s))) for i, r in enumerate(ranks)}

def gen_dyadic(alphabet: int, seed: int = 0) -> Dict[str, int]:
    # weights 2^(n-2), ..., 2, 1, 1: Huffman hits the entropy exactly
    n = min(alphabet, 30)
    weights = {f"s{i}": 2 ** (n - 2 - i) for i in range(n - 1)}
    weights[f"s{n - 1}"] = 1
    return weights

def gen_english_like(alphabet: int, seed: int = 0) -> Dict[str, int]:
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = {}
    for ch in chars[:max(1, alphabet)]:
        if ch == ' ':
            weights[ch] = 130
        elif ch == '\n':
            weights[ch] = 15
        elif ch.lower() in "etaoinshrdlu":
            weights[ch] = 60
        elif ch.lower() in "cmfwgypbvk":
            weights[ch] = 25
        else:
            weights[ch] = 12
    return weights

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], Dict[str, int]]] = {
    "uniform": lambda alphabet, seed: gen_uniform(alphabet, seed=seed),
    "zipf": lambda alphabet, seed: gen_zipf_like(alphabet, s=1.2, seed=seed),
    "dyadic": lambda alphabet, seed: gen_dyadic(alphabet, seed=seed),
    "english_like": lambda alphabet, seed: gen_english_like(alphabet, seed=seed),
}

def generate_table(name: str, alphabet: int, seed: int) -> Dict[str, int]:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown generator {name!r}, expected one of {sorted(GENERATOR_REGISTRY)}")
    return fn(alphabet, seed)

def sample_message(weights: Dict[str, int], length: int, seed: int) -> List[str]:
    rng = random.Random(seed)
    symbols = list(weights)
    return rng.choices(symbols, weights=[weights[s] for s in symbols], k=length)


# Experiment runner

@dataclass
class MetricRow:
    dataset_name: str
    alphabet_size: int
    run_id: int
    message_len: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    avg_code_len: float
    entropy_bits: float
    redundancy_bits: float

    correctness_ok: int  # 1 or 0


def run_one(weights: Dict[str, int], message: List[str]) -> MetricRow:
    t0 = now_ns()
    root = build_huffman_tree(weights)
    t1 = now_ns()

    encoded = encode(root, message)
    t2 = now_ns()

    decoded = decode(root, encoded)
    t3 = now_ns()

    total_weight = sum(weights.values())
    avg_len = weighted_path_length(root) / total_weight if total_weight else 0.0
    h = entropy_bits(weights)

    return MetricRow(
        dataset_name="",
        alphabet_size=len(weights),
        run_id=0,
        message_len=len(message),
        build_ms=ns_to_ms(t1 - t0),
        encode_ms=ns_to_ms(t2 - t1),
        decode_ms=ns_to_ms(t3 - t2),
        total_ms=ns_to_ms(t3 - t0),
        encoded_bits=len(encoded),
        avg_code_len=avg_len,
        entropy_bits=h,
        redundancy_bits=avg_len - h,
        correctness_ok=1 if decoded == message else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by dataset_name, alphabet_size and compute mean/stdev
    """
    key_to: Dict[Tuple[str, int], List[MetricRow]] = {}
    for r in rows:
        key_to.setdefault((r.dataset_name, r.alphabet_size), []).append(r)

    summary_fields = [
        "dataset_name", "alphabet_size", "n_runs",
        "build_ms_mean", "build_ms_stdev",
        "encode_ms_mean", "encode_ms_stdev",
        "decode_ms_mean", "decode_ms_stdev",
        "avg_code_len_mean", "entropy_bits_mean", "redundancy_bits_mean",
        "correctness_ok_rate",
    ]

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for (dataset_name, alphabet), items in sorted(key_to.items()):
            bu_m, bu_s = mean_stdev([x.build_ms for x in items])
            en_m, en_s = mean_stdev([x.encode_ms for x in items])
            de_m, de_s = mean_stdev([x.decode_ms for x in items])

            w.writerow({
                "dataset_name": dataset_name,
                "alphabet_size": alphabet,
                "n_runs": len(items),
                "build_ms_mean": bu_m,
                "build_ms_stdev": bu_s,
                "encode_ms_mean": en_m,
                "encode_ms_stdev": en_s,
                "decode_ms_mean": de_m,
                "decode_ms_stdev": de_s,
                "avg_code_len_mean": statistics.mean(x.avg_code_len for x in items),
                "entropy_bits_mean": statistics.mean(x.entropy_bits for x in items),
                "redundancy_bits_mean": statistics.mean(x.redundancy_bits for x in items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            })


# Plotting

def plot_code_length(rows: List[MetricRow], outdir: Path) -> None:
    datasets = sorted(set(r.dataset_name for r in rows))

    for dataset in datasets:
        ds_rows = [r for r in rows if r.dataset_name == dataset]
        sizes = sorted(set(r.alphabet_size for r in ds_rows))

        def mean_for(size: int, field: str) -> float:
            vals = [getattr(r, field) for r in ds_rows if r.alphabet_size == size]
            return statistics.mean(vals) if vals else float("nan")

        plt.figure()
        plt.plot(sizes, [mean_for(s, "avg_code_len") for s in sizes], marker="o", label="Huffman")
        plt.plot(sizes, [mean_for(s, "entropy_bits") for s in sizes], marker="x", linestyle="--", label="entropy")
        plt.xscale("log", base=2)
        plt.xlabel("Alphabet Size (symbols)")
        plt.ylabel("Bits per Symbol")
        plt.title(f"Average Code Length vs Entropy ({dataset})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"code_length_{dataset}.png", dpi=200)
        plt.close()


def plot_build_time(rows: List[MetricRow], outdir: Path) -> None:
    datasets = sorted(set(r.dataset_name for r in rows))

    plt.figure()
    for dataset in datasets:
        ds_rows = [r for r in rows if r.dataset_name == dataset]
        sizes = sorted(set(r.alphabet_size for r in ds_rows))
        y = [statistics.mean(r.build_ms for r in ds_rows if r.alphabet_size == s) for s in sizes]
        plt.plot(sizes, y, marker="o", label=dataset)
    plt.xscale("log", base=2)
    plt.xlabel("Alphabet Size (symbols)")
    plt.ylabel("Build Time (ms)")
    plt.title("Tree Build Time vs Alphabet Size")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "build_time.png", dpi=200)
    plt.close()


def run_bench(args) -> List[MetricRow]:
    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []
    for gen_name in args.generators:
        for alphabet in args.alphabets:
            for run_id in range(1, args.runs + 1):
                seed = args.seed + 10_000 * alphabet + run_id
                weights = generate_table(gen_name, alphabet, seed)
                message = sample_message(weights, args.message_len, seed)
                row = run_one(weights, message)
                row.dataset_name = gen_name
                row.run_id = run_id
                rows.append(row)

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots and rows:
        plot_code_length(rows, outdir)
        plot_build_time(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return rows


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def alphabet_list(s: str) -> List[int]:
    try:
        sizes = [int(x) for x in parse_csv_list(s)]
    except ValueError:
        raise argparse.ArgumentTypeError(f"alphabet sizes must be integers: {s!r}")
    if not sizes or any(n < 1 for n in sizes):
        raise argparse.ArgumentTypeError(f"alphabet sizes must be >= 1: {s!r}")
    return sizes

def generator_list(s: str) -> List[str]:
    names = parse_csv_list(s)
    unknown = [n for n in names if n not in GENERATOR_REGISTRY]
    if not names or unknown:
        raise argparse.ArgumentTypeError(f"unknown generators {unknown}, expected some of {sorted(GENERATOR_REGISTRY)}")
    return names

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman prefix-code demo and experiments")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Encode/decode through the textbook A..H tree")
    demo.add_argument("--message", type=str, default="A E D", help="Space-separated symbols to encode")
    demo.add_argument("--bits", type=str, default="011001011", help="Bit string to parse and decode")

    bench = sub.add_parser("bench", help="Run synthetic weight-table experiments")
    bench.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    bench.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    bench.add_argument("--seed", type=int, default=123, help="Base random seed")
    bench.add_argument("--message_len", type=int, default=10_000, help="Symbols per encoded message")
    bench.add_argument("--alphabets", type=alphabet_list, default="2,4,8,16,32,64,128,256",
                       help="Comma-separated alphabet sizes")
    bench.add_argument("--generators", type=generator_list, default="uniform,zipf,dyadic,english_like",
                       help="Comma-separated weight-table generator names")
    bench.add_argument("--no_plots", action="store_true", help="Skip writing charts")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.command == "demo":
            run_demo(args.message.split(), args.bits)
        else:
            run_bench(args)
    except (HuffmanError, BitParseError) as exc:
        print(f"error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Quick dedup benchmark.

Examples:
    python -m tools.bench_dedup ./data/*.txt
    python -m tools.bench_dedup --repeat 3 --algorithm levenshtein ./data/page.html
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import List

from blockdedup.loaders import load_text
from blockdedup.options import build_dedup_config
from blockdedup.pipeline import dedup_text


def run(paths: List[str], repeat: int = 1, algorithm: str = "jaccard", split: str = "paragraph") -> None:
    files: List[Path] = []
    for p in paths:
        if any(ch in p for ch in "*?[]"):
            files.extend(Path(".").glob(p))
        else:
            files.append(Path(p))
    files = [f.resolve() for f in files if f.exists()]
    if not files:
        print("No files found.")
        return

    texts = [load_text(f) for f in files]
    cfg = build_dedup_config(algorithm=algorithm, split_method=split)
    t0 = time.perf_counter()
    chars = 0
    dups = 0
    for _ in range(repeat):
        for text in texts:
            res = dedup_text(text, cfg)
            chars += res.stats.original
            dups += res.stats.duplicates_found
    dt = time.perf_counter() - t0
    cps = chars / dt if dt > 0 else 0.0
    print(f"Processed {chars} chars ({dups} duplicate blocks) in {dt:.2f}s  ->  {cps:,.0f} chars/sec")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("paths", nargs="+", help="Files or globs")
    ap.add_argument("--repeat", type=int, default=1, help="Repeat count")
    ap.add_argument("--algorithm", default="jaccard", choices=["jaccard", "cosine", "levenshtein"])
    ap.add_argument("--split", default="paragraph", choices=["paragraph", "sentence", "hybrid", "sized"])
    args = ap.parse_args(argv)

    run(args.paths, repeat=int(args.repeat), algorithm=args.algorithm, split=args.split)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

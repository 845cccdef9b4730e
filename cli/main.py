"""
blockdedup CLI

Command-line front end for the dedup engine. The engine works on in-memory
strings; this module owns the file I/O around it.

High-level overview of commands:

  Dedup
  -----
  - run <path> [options] [--out FILE | --stdout]
      Deduplicate one file ("-" reads stdin). Writes <prefix><name> next to
      the input unless --out/--stdout is given. Prints a JSON summary.

  - batch <path> [<path> ...] [options] [--out-dir DIR] [--workers N]
      Deduplicate several files with the same options. A failing file is
      reported in its own entry; the rest are still processed.

  Inspection
  ----------
  - preview <path> [options] [--max-examples N]
      Show example near-duplicate pairs without removing anything.

  - score "<text a>" "<text b>" [--algorithm A]
      Similarity of two strings after normalization.

  - check-patterns <pattern> [<pattern> ...]
      Report every preserve pattern that fails to compile.

Options shared by run/batch/preview:
  --threshold, --min-block-size, --algorithm, --split, --preserve (repeatable),
  --preserve-file, --readable (HTML main content only), --fixup.
Unset options fall back to the environment / .env (see blockdedup.config).

Exit codes: 0 ok, 1 runtime failure, 2 usage/validation error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set

from blockdedup.config import Config, load_config
from blockdedup.errors import ConfigurationError
from blockdedup.loaders import load_text
from blockdedup.options import (
    DedupConfig,
    build_dedup_config,
    check_preserve_patterns,
    validate_cli_options,
)
from blockdedup.pipeline import (
    preview_duplicates,
    reduction_percent,
    run_batch,
    schedule_dedup,
)
from blockdedup.similarity import calculate_similarity
from blockdedup.utils import block_signature, parse_pattern_lines


_ALGORITHMS = ["jaccard", "cosine", "levenshtein"]
_SPLITS = ["paragraph", "sentence", "hybrid", "sized"]


# -----------------------------------------------------------------------------
# Small helpers
# -----------------------------------------------------------------------------

def _emit(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _emit_error(action: str, message: str) -> None:
    print(json.dumps({"action": action, "error": message}, ensure_ascii=False), file=sys.stderr)


def _setup_logging(cfg: Config) -> None:
    level = getattr(logging, str(cfg.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _patterns_from_args(args: argparse.Namespace) -> Optional[List[str]]:
    """Collect --preserve flags and --preserve-file lines; None if neither was given."""
    pats: List[str] = list(getattr(args, "preserve", None) or [])
    pfile = getattr(args, "preserve_file", None)
    if pfile:
        pats.extend(parse_pattern_lines(Path(pfile).read_text(encoding="utf-8")))
    if not pats and not pfile:
        return None
    return pats


def _dedup_config_from_args(args: argparse.Namespace, cfg: Config) -> DedupConfig:
    """
    Validate the CLI options (strict unless --fixup) and overlay them on the
    configured defaults.
    """
    raw = {
        "similarity_threshold": args.threshold,
        "min_block_size": args.min_block_size,
        "algorithm": args.algorithm,
        "split_method": args.split,
        "preserve_patterns": _patterns_from_args(args),
    }
    clean = validate_cli_options(raw, fixup=bool(getattr(args, "fixup", False)))
    return build_dedup_config(base=cfg.to_dedup_config(), **clean)


def _output_path(src: Path, *, prefix: str, out_dir: Optional[str]) -> Path:
    folder = Path(out_dir) if out_dir else src.parent
    return folder / f"{prefix}{src.name}"


def _unique_output_path(path: Path, used: Set[Path]) -> Path:
    """Number the name (page_2.txt, page_3.txt, ...) when this batch already wrote to path."""
    candidate = path
    n = 1
    while candidate.resolve() in used:
        n += 1
        candidate = path.with_name(f"{path.stem}_{n}{path.suffix}")
    used.add(candidate.resolve())
    return candidate


# -----------------------------------------------------------------------------
# Command implementations
# -----------------------------------------------------------------------------

def cmd_run(args: argparse.Namespace) -> int:
    """
    Deduplicate one file.
    Side effects: writes the result file (unless --stdout).
    """
    cfg = load_config()
    try:
        dcfg = _dedup_config_from_args(args, cfg)
    except (ValueError, OSError) as e:
        _emit_error("run", str(e))
        return 2

    try:
        text = load_text(args.path, readable=bool(args.readable))
    except (ValueError, OSError) as e:
        _emit_error("run", str(e))
        return 2

    try:
        res = schedule_dedup(
            text,
            dcfg,
            large_input_threshold=int(cfg.large_input_chars),
            progress_every=int(cfg.progress_every),
        ).result()
    except ConfigurationError as e:
        _emit_error("run", str(e))
        return 2
    except Exception as e:
        _emit_error("run", str(e))
        return 1

    if args.stdout:
        sys.stdout.write(res.text)
        if res.text and not res.text.endswith("\n"):
            sys.stdout.write("\n")
        return 0

    if args.out:
        out_path = Path(args.out)
    elif args.path == "-":
        out_path = Path(f"{cfg.output_prefix}stdin.txt")
    else:
        out_path = _output_path(Path(args.path), prefix=cfg.output_prefix, out_dir=None)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(res.text, encoding="utf-8")

    _emit({
        "action": "run",
        "file": str(args.path),
        "output": str(out_path),
        "blocks": res.total_blocks,
        "kept": len(res.blocks),
        "stats": res.stats.to_dict(),
        "reduction": round(res.reduction_percent, 2),
        "options": dcfg.to_dict(),
    })
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """
    Deduplicate several files with the same options.
    Per-file failures (unreadable file, bad pattern) are reported per entry.
    """
    cfg = load_config()
    try:
        dcfg = _dedup_config_from_args(args, cfg)
    except (ValueError, OSError) as e:
        _emit_error("batch", str(e))
        return 2

    readable = bool(args.readable)
    inputs = [
        (p, (lambda p=p: load_text(p, readable=readable)))
        for p in args.paths
    ]
    workers = int(args.workers) if args.workers is not None else int(cfg.batch_workers)
    results = run_batch(inputs, dcfg, max_workers=workers)

    items = []
    used: Set[Path] = set()
    for item in results:
        entry = item.to_dict()
        if item.ok and item.result is not None:
            out_path = _unique_output_path(
                _output_path(Path(item.name), prefix=cfg.output_prefix, out_dir=args.out_dir),
                used,
            )
            try:
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(item.result.text, encoding="utf-8")
                entry["output"] = str(out_path)
            except OSError as e:
                entry = {"name": item.name, "error": f"{type(e).__name__}: {e}"}
        items.append(entry)

    failed = sum(1 for e in items if "error" in e)
    total_orig = sum(r.original_size for r in results if r.ok)
    total_proc = sum(r.processed_size for r in results if r.ok)
    _emit({
        "action": "batch",
        "count": len(items),
        "failed": failed,
        "reduction": round(reduction_percent(total_orig, total_proc), 2),
        "items": items,
        "options": dcfg.to_dict(),
    })
    return 1 if failed else 0


def cmd_preview(args: argparse.Namespace) -> int:
    """
    Advisory near-duplicate examples (nothing is removed).
    """
    cfg = load_config()
    try:
        dcfg = _dedup_config_from_args(args, cfg)
        text = load_text(args.path, readable=bool(args.readable))
    except (ValueError, OSError) as e:
        _emit_error("preview", str(e))
        return 2

    max_examples = int(args.max_examples) if args.max_examples is not None else int(cfg.preview_examples)
    examples = preview_duplicates(
        text,
        dcfg,
        max_examples=max_examples,
        max_chars=int(cfg.preview_max_chars),
    )
    _emit({
        "action": "preview",
        "file": str(args.path),
        "skipped": len(text) > int(cfg.preview_max_chars),
        "count": len(examples),
        "examples": [e.to_dict() for e in examples],
        "options": dcfg.to_dict(),
    })
    return 0


def cmd_score(args: argparse.Namespace) -> int:
    """Similarity of two strings after signature normalization."""
    sig_a, sig_b = block_signature(args.text_a), block_signature(args.text_b)
    algo = args.algorithm or load_config().algorithm
    score = calculate_similarity(sig_a, sig_b, algo)
    _emit({
        "action": "score",
        "algorithm": algo,
        "signatures": [sig_a, sig_b],
        "similarity": round(score, 6),
    })
    return 0


def cmd_check_patterns(args: argparse.Namespace) -> int:
    """Compile each pattern and list the ones that fail."""
    pats = parse_pattern_lines(args.patterns)
    issues = check_preserve_patterns(pats)
    _emit({
        "action": "check-patterns",
        "count": len(pats),
        "valid": not issues,
        "issues": [i.to_dict() for i in issues],
    })
    return 2 if issues else 0


# -----------------------------------------------------------------------------
# Argument parser construction
# -----------------------------------------------------------------------------

def _add_dedup_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--threshold", type=float, help="Similarity threshold in [0, 1] (default 0.7)")
    p.add_argument("--min-block-size", type=int, help="Blocks shorter than this always survive (default 30)")
    p.add_argument("--algorithm", type=str, choices=_ALGORITHMS, help="Similarity algorithm (default jaccard)")
    p.add_argument("--split", type=str, choices=_SPLITS, help="Block split method (default paragraph)")
    p.add_argument("--preserve", action="append", metavar="PATTERN", help="Regex; matching blocks are always kept (repeatable)")
    p.add_argument("--preserve-file", type=str, help="File with one preserve regex per line")
    p.add_argument("--readable", action="store_true", help="HTML: keep only the main content (readability)")
    p.add_argument("--fixup", action="store_true", help="Clamp out-of-range numbers instead of failing")


def build_parser() -> argparse.ArgumentParser:
    """
    Define CLI structure, flags, choices, defaults, and handlers.
    Each subparser sets .set_defaults(func=...), which is called by main().
    """
    p = argparse.ArgumentParser(prog="blockdedup", description="Remove near-duplicate blocks from text")
    sub = p.add_subparsers(dest="command", required=True)

    # --- run ---
    pr = sub.add_parser("run", help="Deduplicate one file")
    pr.add_argument("path", help="Input file (.txt/.md/.html or '-' for stdin)")
    pr.add_argument("--out", type=str, help="Output file (default: <prefix><name> next to input)")
    pr.add_argument("--stdout", action="store_true", help="Write the deduplicated text to stdout")
    _add_dedup_options(pr)
    pr.set_defaults(func=cmd_run)

    # --- batch ---
    pb = sub.add_parser("batch", help="Deduplicate several files")
    pb.add_argument("paths", nargs="+", help="Input files")
    pb.add_argument("--out-dir", type=str, help="Directory for outputs (default: next to each input)")
    pb.add_argument("--workers", type=int, help="Concurrent files (default 1 = sequential)")
    _add_dedup_options(pb)
    pb.set_defaults(func=cmd_batch)

    # --- preview ---
    pp = sub.add_parser("preview", help="Show example near-duplicate pairs")
    pp.add_argument("path", help="Input file")
    pp.add_argument("--max-examples", type=int, help="Max pairs to show (default 5)")
    _add_dedup_options(pp)
    pp.set_defaults(func=cmd_preview)

    # --- score ---
    ps = sub.add_parser("score", help="Similarity of two strings")
    ps.add_argument("text_a")
    ps.add_argument("text_b")
    ps.add_argument("--algorithm", type=str, choices=_ALGORITHMS, help="Similarity algorithm")
    ps.set_defaults(func=cmd_score)

    # --- check-patterns ---
    pc = sub.add_parser("check-patterns", help="Validate preserve patterns")
    pc.add_argument("patterns", nargs="+", help="Regex patterns")
    pc.set_defaults(func=cmd_check_patterns)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    """
    Entrypoint:
      - Parse CLI args
      - Dispatch to subcommand handler
      - Return handler's exit code as process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(load_config())
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

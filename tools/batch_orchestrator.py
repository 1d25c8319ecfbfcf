#!/usr/bin/env python3
"""istrings batch runner.

- Scans every sample with the same letter-run threshold, one after another.
- Writes an NDJSON index (one line per sample) for fast grepping / ingestion.
- Optionally keeps each sample's accepted strings in <outdir>/<sha256>.txt.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from hashlib import sha256
from pathlib import Path

from istrings.artifacts import DEFAULT_MIN_SEQUENCE, extract_candidates, unique_accepted


def sha256_hex(data: bytes) -> str:
    return sha256(data).hexdigest()


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def iter_samples(inp: list[str]) -> list[Path]:
    out: list[Path] = []
    for s in inp:
        p = Path(s)
        if p.is_dir():
            for child in sorted(p.iterdir()):
                if child.is_file() and os.access(child, os.R_OK):
                    out.append(child.resolve())
        else:
            out.append(p.resolve())
    # de-dupe preserving order
    seen: set[str] = set()
    uniq: list[Path] = []
    for p in out:
        k = str(p)
        if k in seen:
            continue
        seen.add(k)
        uniq.append(p)
    return uniq


def scan_one(sample: Path, min_sequence: int, strings_dir: Path | None = None) -> dict:
    start = time.time()
    row: dict = {"ts": now_iso(), "sample": str(sample), "min_sequence": min_sequence}
    try:
        blob = sample.read_bytes()
    except OSError as e:
        row["error"] = f"{type(e).__name__}: {e.strerror or e}"
        return row
    if not blob:
        row["error"] = "empty file"
        return row

    candidates = extract_candidates(blob)
    strings = list(unique_accepted(candidates, min_sequence))
    digest = sha256_hex(blob)
    if strings_dir is not None:
        (strings_dir / f"{digest}.txt").write_text("".join(s + "\n" for s in strings), encoding="ascii")

    row.update({
        "sample_sha256": digest,
        "size": len(blob),
        "candidates": len(candidates),
        "count": len(strings),
        "duration_s": round(time.time() - start, 3),
    })
    return row


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Batch-run istrings across many samples")
    ap.add_argument("inputs", nargs="+", help="Sample files and/or directories")
    ap.add_argument("--outdir", default="istrings_runs", help="Directory for the index and string dumps")
    ap.add_argument("--min", dest="min_sequence", type=int, default=DEFAULT_MIN_SEQUENCE,
                    help=f"Minimum letter run (default: {DEFAULT_MIN_SEQUENCE})")
    ap.add_argument("--index", default="batch_index.ndjson", help="NDJSON index filename")
    ap.add_argument("--keep-strings", action="store_true", help="Write <sha256>.txt with each sample's strings")
    args = ap.parse_args(argv)

    outdir = Path(args.outdir).resolve()
    outdir.mkdir(parents=True, exist_ok=True)

    samples = [p for p in iter_samples(args.inputs) if p.exists() and p.is_file()]
    if not samples:
        raise SystemExit("No readable samples found")

    idx_path = outdir / args.index
    strings_dir = outdir if args.keep_strings else None
    with idx_path.open("a", encoding="utf-8") as f:
        for s in samples:
            row = scan_one(s, args.min_sequence, strings_dir)
            if "error" in row:
                print(f"[istrings] {s}: {row['error']}", file=sys.stderr)
            f.write(json.dumps(row) + "\n")
            f.flush()

    print(f"[istrings] batch index: {idx_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

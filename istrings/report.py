import json
from pathlib import Path
from typing import Any, Dict, List

from .artifacts import DEFAULT_MIN_SEQUENCE, extract_candidates, unique_accepted


def scan_file(path: Path, min_sequence: int = DEFAULT_MIN_SEQUENCE) -> Dict[str, Any]:
    """Scan one file and return a dict for reporting."""
    blob = path.read_bytes()
    if not blob:
        raise ValueError(f"empty file: {path}")
    candidates = extract_candidates(blob)
    strings = list(unique_accepted(candidates, min_sequence))
    return {
        "file": str(path),
        "size": len(blob),
        "min_sequence": min_sequence,
        "candidates": len(candidates),
        "count": len(strings),
        "strings": strings,
    }


def write_json(path: Path, obj: Any) -> None:
    path.write_text(json.dumps(obj, indent=2, sort_keys=False), encoding="utf-8")


def write_markdown(path: Path, report: Dict[str, Any], limit: int = 200) -> None:
    lines: List[str] = []
    lines.append("# istrings report")
    lines.append("")
    lines.append(f"**File:** `{report.get('file','')}`")
    lines.append(f"**Size:** `{report.get('size', 0)}` bytes")
    lines.append(f"**Min letter run:** `{report.get('min_sequence')}`")
    if report.get("ts"):
        lines.append(f"**Timestamp:** `{report.get('ts')}`")
    lines.append("")

    strings = report.get("strings", [])
    lines.append(f"## Extracted Strings ({report.get('count', len(strings))} of {report.get('candidates', 0)} candidates)")
    lines.append("")
    for s in strings[:limit]:
        lines.append(f"- `{s}`")
    if len(strings) > limit:
        lines.append(f"- ... ({len(strings)-limit} more)")
    lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")

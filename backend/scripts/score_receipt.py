"""Offline receipt scorer.

Validates a receipt JSON file with the same schema the API uses and
prints the points it would be awarded, without starting the server.

Usage:
  python scripts/score_receipt.py path/to/receipt.json [--breakdown] [--json]

Exit codes:
  0  scored successfully
  1  file missing, not JSON, or not a valid receipt
  2  bad usage
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

# Allow running from a checkout without installing the package
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from pydantic import ValidationError  # noqa: E402

from receipt_points.models.schemas import ReceiptCreate  # noqa: E402
from receipt_points.services.points_service import score_breakdown  # noqa: E402


def load_receipt(path: Path) -> ReceiptCreate:
    with path.open("r", encoding="utf-8") as fh:
        return ReceiptCreate.model_validate(json.load(fh))


def render(path: Path, receipt: ReceiptCreate, breakdown: bool, as_json: bool) -> str:
    rules = score_breakdown(receipt)
    points = sum(r.points for r in rules)
    if as_json:
        payload: Dict[str, Any] = {"file": str(path), "points": points}
        if breakdown:
            payload["rules"] = [r.model_dump() for r in rules]
        return json.dumps(payload, indent=2)
    lines: List[str] = []
    if breakdown:
        width = max(len(r.rule) for r in rules)
        lines.extend(f"  {r.rule.ljust(width)}  {r.points:>5}" for r in rules)
    lines.append(f"{path.name}: {points} points")
    return "\n".join(lines)


def main(argv: List[str]) -> int:
    flags = {a for a in argv if a.startswith("--")}
    paths = [a for a in argv if not a.startswith("--")]
    unknown = flags - {"--breakdown", "--json"}
    if len(paths) != 1 or unknown:
        print(__doc__.strip(), file=sys.stderr)
        return 2
    path = Path(paths[0])
    try:
        receipt = load_receipt(path)
    except FileNotFoundError:
        print(f"[error] no such file: {path}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"[error] {path} is not valid JSON: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"[error] {path} is not a valid receipt:\n{e}", file=sys.stderr)
        return 1
    print(render(path, receipt, "--breakdown" in flags, "--json" in flags))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))

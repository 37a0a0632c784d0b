"""Check that the lazily exported `pypixbuf` API is consistent.

Run from a checkout with ``python tools/audit_public_api.py [--json]``.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _import_package():
    # `python tools/<script>.py` puts tools/ on sys.path, not the checkout root.
    if str(REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(REPO_ROOT))
    import pypixbuf

    return pypixbuf


def audit_public_api() -> list[str]:
    """Return human-readable problems found in `pypixbuf.__all__`.

    - every exported name resolves through the lazy loader
    - no name is exported twice
    - every exported ``*Error`` derives from `PixelBufferError`
    """

    pkg = _import_package()
    exported = list(getattr(pkg, "__all__", []))
    problems = [f"{name}: exported {n} times" for name, n in Counter(exported).items() if n > 1]

    resolved = {}
    for name in exported:
        try:
            resolved[name] = getattr(pkg, name)
        except Exception as exc:  # noqa: BLE001 - tool boundary
            problems.append(f"{name}: {exc}")

    base = resolved.get("PixelBufferError")
    if base is None:
        problems.append("PixelBufferError: not exported")
    else:
        for name, obj in resolved.items():
            if name.endswith("Error") and not (isinstance(obj, type) and issubclass(obj, base)):
                problems.append(f"{name}: does not derive from PixelBufferError")
    return problems


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="audit_public_api")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    args = parser.parse_args(argv)

    problems = audit_public_api()
    if bool(args.json):
        print(json.dumps({"ok": not problems, "issues": problems}, indent=2, sort_keys=True))
    elif problems:
        for problem in problems:
            print(f"error: {problem}", file=sys.stderr)
    else:
        print("ok: pypixbuf public API")
    return 1 if problems else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

#!/usr/bin/env python3
"""Batch render the example set lists to SVG and PNG.

Outputs go to /tmp/djgraph_renders/.

Usage:
    python scripts/render_examples.py [--debug] [--seed N]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from djgraph.layout import compute_layout
from djgraph.parser import parse_setlist
from djgraph.render import render_svg
from djgraph.themes import THEMES

project_root = Path(__file__).parent.parent
EXAMPLES_DIR = project_root / "examples"
OUTPUT_DIR = Path("/tmp/djgraph_renders")


def render_file(
    path: Path, output_dir: Path, *, debug: bool = False, seed: int | None = None
) -> tuple[str, list[str]]:
    """Parse, lay out and render one set list to SVG (and optionally PNG).

    Returns (name, list_of_issues).
    """
    name = path.stem
    issues: list[str] = []

    try:
        graph = parse_setlist(path.read_text())
    except ValueError as e:
        return name, [f"PARSE ERROR: {e}"]

    layout = compute_layout(graph, seed=seed)
    svg_str = render_svg(layout, THEMES["dark"], title=graph.title, debug=debug)

    svg_path = output_dir / f"{name}.svg"
    svg_path.write_text(svg_str)

    # PNG conversion via cairosvg (optional extra)
    try:
        import cairosvg
    except ImportError:
        issues.append("cairosvg not available, skipping PNG")
        return name, issues

    png_path = output_dir / f"{name}.png"
    try:
        cairosvg.svg2png(bytestring=svg_str.encode(), write_to=str(png_path), scale=2)
    except (OSError, ValueError) as e:
        issues.append(f"PNG conversion error: {e}")

    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render example set lists")
    parser.add_argument("--debug", action="store_true",
                        help="Mark chosen attachment points")
    parser.add_argument("--seed", type=int, default=None, help="Layout jitter seed")
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    files = sorted(EXAMPLES_DIR.glob("*.djg"))
    if not files:
        print(f"No set lists found in {EXAMPLES_DIR}")
        return

    print(f"Rendering {len(files)} files to {OUTPUT_DIR}/\n")
    width = max(len(f.stem) for f in files)
    any_errors = False

    for path in files:
        name, issues = render_file(path, OUTPUT_DIR, debug=args.debug, seed=args.seed)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True
        print(f"  {name:<{width}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()

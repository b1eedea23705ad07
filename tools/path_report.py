"""
Headless report for a coordinate file.
Prints the minimum step count and every movement with its formula,
and optionally saves a board image.

Usage:
    python tools/path_report.py data/coordinates.json
    python tools/path_report.py coords.json --image report.png
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.path_session import calculate_path
from src.pathing import BoardLayout, MAX_RENDERED_SIZE, build_educational_context
from src.i18n import translate
from src.snapshot import render_board
from src.validation import describe_error


def report(path: str, language: str = "en", image: str = None) -> int:
    """Print a report for one file. Returns a process exit code."""
    print(f"\n{'='*60}")
    print(f"Coordinates: {path}")
    print(f"{'='*60}")

    try:
        text = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        print(f"Cannot read file: {e}")
        return 1

    result = calculate_path(text)
    if not result.success:
        message = describe_error(result.error, language, result.details)
        print(f"Error: {message}")
        if result.details and result.details not in message:
            print(f"  {result.details}")
        return 1

    print(f"{translate('board.analysis.totalCoordinates', language)}: {len(result.coordinates)}")
    print(f"{translate('board.analysis.minSteps', language)}: {result.total_steps}")

    if result.movements:
        print(f"\n{'Step':>4} {'From':>10} {'Dir':>4} {'To':>10}  Formula")
        print("-" * 50)
    for movement in result.movements:
        context = build_educational_context(movement)
        print(f"{movement.step_number:>4} {str(movement.origin):>10} "
              f"{movement.direction.value:>4} {str(movement.target):>10}  {context.formula}")

    if image:
        layout = BoardLayout.from_waypoints(result.coordinates)
        if layout.renderable:
            render_board(layout, result.movements).save(image, "PNG")
            print(f"\nBoard image saved: {image}")
        else:
            print(f"\n{translate('board.tooLarge', language, size=MAX_RENDERED_SIZE)}")

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the path for a coordinate file")
    parser.add_argument("files", nargs="+", help="JSON files with [{\"x\": .., \"y\": ..}]")
    parser.add_argument("--language", "-l", default="en", help="Report language (en, es)")
    parser.add_argument("--image", "-i", default=None, help="Save a board PNG (single file only)")
    args = parser.parse_args()

    exit_code = 0
    for file_path in args.files:
        exit_code |= report(file_path, args.language, args.image if len(args.files) == 1 else None)
    sys.exit(exit_code)

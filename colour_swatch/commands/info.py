"""Print the parsed swatch description without decoding any image.

Shows which files are set ([X]) or not ([-]), the mask file and its
background colour if one is configured, and one line per patch with its
reflectance and ISCC-NBS label.

Example:
    uv run swatch-tool info swatch.ini
    uv run swatch-tool info swatch.ini --json
"""

from colour_swatch.core.report import format_json, format_text
from colour_swatch.core.swatch import SwatchConfig
from colour_swatch.core.types import Command

command = Command(name='info', help='Print the parsed swatch settings (no image decoding).')


@command.run
def run(swatch: SwatchConfig, args) -> int:
    print(format_json(swatch) if args.json else format_text(swatch))
    return 0

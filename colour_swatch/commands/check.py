"""Load the raw image and mask, and check they fit together.

Decodes the raw file and, when a [mask] section is set, the mask image.
The mask must have exactly the raw image's pixel dimensions. Prints the
report afterwards; exits 1 if the raw image could not be decoded.

Example:
    uv run swatch-tool check swatch.ini
"""

import sys

from colour_swatch.core.report import format_json, format_text
from colour_swatch.core.swatch import SwatchConfig
from colour_swatch.core.types import Command

command = Command(name='check', help='Decode raw image and mask; verify their sizes match.')


@command.run
def run(swatch: SwatchConfig, args) -> int:
    loaded = swatch.load_images()
    print(format_json(swatch) if args.json else format_text(swatch))
    if not loaded:
        print(f'swatch-tool: raw image could not be decoded: {swatch.raw_file_path}', file=sys.stderr)
        return 1
    return 0

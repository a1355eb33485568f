"""Print the mask background colour, detecting it when not configured.

Detection picks the single most frequent exact RGBA value in the mask.
Opaque colours print as #rrggbb, others as #rrggbbaa.
Requires a [mask] section.

Example:
    uv run swatch-tool background swatch.ini
"""

import json
import sys

from colour_swatch.core.colour import colour_to_hex
from colour_swatch.core.errors import ErrorKind, SwatchError
from colour_swatch.core.swatch import SwatchConfig
from colour_swatch.core.types import Command

command = Command(name='background', help='Print the mask background colour (auto-detected if unset).')


@command.run
def run(swatch: SwatchConfig, args) -> int:
    configured = swatch.mask is not None and swatch.mask.has_background_colour()
    swatch.load_images()
    if swatch.mask is None:
        raise SwatchError(
            ErrorKind.PRECONDITION_VIOLATION,
            path=swatch.settings_path,
            detail='no loaded mask to read a background from',
        )
    colour = swatch.mask.ensure_background_colour()
    if not configured:
        print(f'Detect background : ({colour[0]} , {colour[1]} , {colour[2]})', file=sys.stderr)

    if args.json:
        print(
            json.dumps(
                {
                    'background': colour_to_hex(colour),
                    'rgb': list(colour[:3]),
                    'alpha': colour[3],
                    'detected': not configured,
                },
                indent=2,
            )
        )
    else:
        print(colour_to_hex(colour))
    return 0

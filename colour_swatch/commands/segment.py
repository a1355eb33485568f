"""Cut the mask into one PNG per patch.

Raster-scans the mask top to bottom, left to right. Each non-background
pixel not yet consumed starts a patch whose rectangle is grown down its
first column and right along its first row until background is hit.
Patches are saved as <out_dir>/patch_0.png, patch_1.png, ... in discovery
order. The background colour is auto-detected when the settings file
does not set one.

Output directory: --out-dir, else the current directory.

Example:
    uv run swatch-tool segment swatch.ini
    uv run swatch-tool segment swatch.ini --out-dir ./patches --json
"""

import json
import sys

from colour_swatch.core.swatch import SwatchConfig
from colour_swatch.core.types import Command

command = Command(name='segment', help='Split the mask into patch_<n>.png images.')


@command.run
def run(swatch: SwatchConfig, args) -> int:
    configured = swatch.mask is not None and swatch.mask.has_background_colour()
    swatch.load_images()
    saved = swatch.fill_patches_from_mask(output_dir=args.out_dir)
    if not configured:
        bg = swatch.mask.background_colour
        print(f'Detect background : ({bg[0]} , {bg[1]} , {bg[2]})', file=sys.stderr)
    for patch in saved:
        print(f'Save {patch.path} [{patch.width}x{patch.height}]', file=sys.stderr)

    if args.json:
        print(
            json.dumps(
                {
                    'patches': [
                        {
                            'index': p.index,
                            'file': p.path,
                            'bounds': list(p.bounds),
                            'width': p.width,
                            'height': p.height,
                        }
                        for p in saved
                    ],
                    'count': len(saved),
                },
                indent=2,
            )
        )
    else:
        print(f'{len(saved)} patch image(s) written')
    return 0

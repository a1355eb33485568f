"""Colour token and ISCC-NBS label parsing.

Colour tokens are whatever PIL.ImageColor understands (#rgb, #rrggbb,
#rrggbbaa, CSS names, rgb()/hsl() functions). Colours are kept as RGBA;
tokens without alpha are opaque.
"""

import re

from PIL import ImageColor

from colour_swatch.core.errors import Check, ErrorKind
from colour_swatch.core.types import RGB, RGBA, ColourLabel

_LABEL_RE = re.compile(r'^(\d+)\s*[:\s]\s*(.+)$')

OPAQUE = 255


def to_rgba(colour: RGB | RGBA) -> RGBA:
    alpha = colour[3] if len(colour) > 3 else OPAQUE
    return (int(colour[0]), int(colour[1]), int(colour[2]), int(alpha))


def parse_colour(token: str) -> Check[RGBA]:
    """Parse a colour token into an (r, g, b, a) tuple."""
    text = token.strip()
    if not text:
        return Check.failure(ErrorKind.INVALID_COLOR, value=token)
    try:
        colour = ImageColor.getrgb(text)
    except ValueError:
        return Check.failure(ErrorKind.INVALID_COLOR, value=token)
    return Check.success(to_rgba(colour))


def parse_label(token: str) -> Check[ColourLabel]:
    """Parse an ISCC-NBS label: '<code>:<name>', '<code> <name>' or '<name>'."""
    text = token.strip()
    if not text:
        return Check.failure(ErrorKind.INVALID_VALUE, key='ISCCNBS', value=token)
    m = _LABEL_RE.match(text)
    if m:
        return Check.success(ColourLabel(name=m.group(2).strip(), code=int(m.group(1))))
    return Check.success(ColourLabel(name=text))


def colour_to_hex(colour: RGB | RGBA) -> str:
    """#rrggbb, or #rrggbbaa when the colour is not opaque."""
    text = f'#{colour[0]:02x}{colour[1]:02x}{colour[2]:02x}'
    if len(colour) > 3 and colour[3] != OPAQUE:
        text += f'{colour[3]:02x}'
    return text

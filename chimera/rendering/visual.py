"""SVG portraits for creatures.

The layout is fixed: a 400x400 canvas whose background, central circle and
central triangle are colored by strength, speed and intelligence, with the
merge count printed underneath.
"""

from collections.abc import Mapping

from .data_uri import encode_data_uri


SVG_MEDIA_TYPE = "image/svg+xml"
CANVAS_SIZE = 400

# 0xFFFFFF, the largest 3-byte value. Colors wrap modulo this, so
# color_hex(0xFFFFFF) is "000000".
COLOR_MODULUS = 16_777_215

SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
    'viewBox="0 0 {size} {size}">'
    '<rect width="{size}" height="{size}" fill="#{background}"/>'
    '<circle cx="{center}" cy="{center}" r="100" fill="#{body}"/>'
    '<polygon points="{center},130 {tri_right},250 {tri_left},250" fill="#{crest}"/>'
    '<text x="{center}" y="360" font-family="monospace" font-size="24" '
    'text-anchor="middle" fill="#ffffff">Merges: {merge_count}</text>'
    "</svg>"
)


def color_hex(value: int) -> str:
    """Six lowercase hex digits for a trait value.

    The value is reduced modulo 0xFFFFFF and written as three big-endian
    bytes (high, middle, low).
    """
    reduced = value % COLOR_MODULUS
    return reduced.to_bytes(3, "big").hex()


def render_svg(traits: Mapping[str, int], merge_count: int) -> str:
    """Render the raw SVG markup for a set of traits."""
    center = CANVAS_SIZE // 2
    return SVG_TEMPLATE.format(
        size=CANVAS_SIZE,
        center=center,
        tri_left=center - 70,
        tri_right=center + 70,
        background=color_hex(traits["strength"]),
        body=color_hex(traits["speed"]),
        crest=color_hex(traits["intelligence"]),
        merge_count=merge_count,
    )


def render_visual(traits: Mapping[str, int], merge_count: int) -> str:
    """Render a creature portrait as a base64 SVG data URI.

    Args:
        traits: Mapping with at least strength, speed and intelligence
        merge_count: Number shown on the portrait

    Returns:
        data:image/svg+xml;base64,... string
    """
    return encode_data_uri(SVG_MEDIA_TYPE, render_svg(traits, merge_count))

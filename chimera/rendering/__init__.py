"""Deterministic rendering of creatures.

- visual.py: SVG portrait as a data URI
- metadata.py: JSON metadata document as a data URI
- data_uri.py: Encoding and decoding of base64 data URIs
"""

from .data_uri import encode_data_uri, decode_data_uri
from .visual import color_hex, render_svg, render_visual
from .metadata import MetadataDocument, TraitEntry, build_metadata, render_metadata

__all__ = [
    # Data URIs
    "encode_data_uri",
    "decode_data_uri",
    # Portraits
    "color_hex",
    "render_svg",
    "render_visual",
    # Metadata
    "MetadataDocument",
    "TraitEntry",
    "build_metadata",
    "render_metadata",
]

# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Pixel data assembly and the RLE Lossless codec."""

from dcmcore.pixels.multiframe import MultiFramePixelData
from dcmcore.pixels.rle import (
    decode_rle_frame,
    decompress,
    get_pixeldata,
    rle_decode_into,
    rle_decode_segment,
    rle_encode_frame,
)

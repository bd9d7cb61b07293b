"""Packet-level codec for osccodec.

This module provides the entry points that encode a Message or Bundle to
bytes and decode received bytes back to the right structure.
"""

from __future__ import annotations

from .decoder import decode_packet
from .encoder import encode_packet

__all__ = [
    "encode_packet",
    "decode_packet",
]

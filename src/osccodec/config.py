"""Decoder configuration.

This module provides the options that bound how permissive packet decoding is.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DecodeConfig:
    """Configuration for packet decoding.

    Attributes:
        max_bundle_depth: Maximum bundle nesting accepted while decoding
            (default 32). The top-level bundle counts as depth 1.

        allow_trailing_bytes: Accept bytes left over after a top-level
            message (default False).

    Examples:
        ```python
        from osccodec import DecodeConfig, decode_packet

        # Shallow bundles only, from an untrusted peer
        config = DecodeConfig(max_bundle_depth=4)
        content = decode_packet(data, config)
        ```
    """

    max_bundle_depth: int = 32
    allow_trailing_bytes: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_bundle_depth < 1:
            raise ValueError(f"max_bundle_depth must be >= 1, got {self.max_bundle_depth}")


DEFAULT_CONFIG = DecodeConfig()

"""Converter configuration — env vars and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

OUTPUT_FORMATS = ("yaml", "json")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass
class ConverterConfig:
    """Application-wide configuration."""

    # Treat peers with malformed CIDRs as unrestricted instead of failing.
    tolerate_malformed_peers: bool = False
    output_format: str = "yaml"

    @classmethod
    def load(cls) -> ConverterConfig:
        """Load config from environment variables."""
        config = cls()

        env_tolerate = os.environ.get("K8SCONV_TOLERATE_MALFORMED_PEERS")
        if env_tolerate:
            config.tolerate_malformed_peers = env_tolerate.lower() in _TRUE_VALUES

        env_format = os.environ.get("K8SCONV_OUTPUT_FORMAT")
        if env_format:
            env_format = env_format.lower()
            if env_format not in OUTPUT_FORMATS:
                raise ValueError(f"Unsupported output format: {env_format}")
            config.output_format = env_format

        return config

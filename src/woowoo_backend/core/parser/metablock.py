"""
Metablock Parsing Module

Decodes the YAML metablocks that may follow a part or object header or close
the content of a block. Malformed metablocks are common (plain text that only
looks like ``key: value`` lines), so every decoding problem degrades to an
empty mapping instead of an error.
"""

import logging
import textwrap
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class MetablockParser:
    """
    Parser for YAML metablocks.

    Produces a string-keyed mapping for any input: absent, blank, invalid
    or non-mapping metablocks all yield ``{}``.
    """

    def parse(self, source: Optional[str]) -> Dict[str, Any]:
        """
        Parse a metablock into a mapping.

        Args:
            source: Metablock text, possibly indented, or None if the
                construct has no metablock

        Returns:
            Mapping of metadata keys to decoded values (empty on failure)
        """
        if source is None or not source.strip():
            return {}

        try:
            decoded = yaml.safe_load(textwrap.dedent(source))
        except (yaml.YAMLError, ValueError) as e:
            logger.debug(f"Ignoring malformed metablock: {e}")
            return {}

        if not isinstance(decoded, dict):
            logger.debug(
                f"Ignoring metablock that decodes to {type(decoded).__name__}, not a mapping"
            )
            return {}

        return {str(key): value for key, value in decoded.items()}

"""Logic for fingerprinting the configuration a port run used."""

import hashlib
import json
from typing import Any

# Sections that only change what gets logged, not what gets ported.
UNHASHED_SECTIONS = frozenset({"reporting"})


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a stable hash of the settings that affect the ported text.

    Uses canonical JSON serialization (sorted keys).
    """
    relevant = {k: v for k, v in config.items() if k not in UNHASHED_SECTIONS}
    config_json = json.dumps(relevant, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()

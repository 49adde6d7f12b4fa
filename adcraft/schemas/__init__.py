"""
JSON schemas shipped with adcraft.

- campaign_brief: the raw brief document accepted by the CLI and loaders
"""

import os
import json
from functools import lru_cache

SCHEMA_DIR = os.path.dirname(os.path.abspath(__file__))
CAMPAIGN_BRIEF = "campaign_brief"

@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict:
    """
    Load a bundled JSON schema by name (file name without extension).

    Raises:
        FileNotFoundError: If no schema with that name is bundled
    """
    with open(os.path.join(SCHEMA_DIR, f"{schema_name}.json"), 'r') as f:
        return json.load(f)

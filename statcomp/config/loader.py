"""
Configuration loader for statcomp.

Loads algorithm defaults and reference scenario parameters from
statcomp/config/constants.yaml, which ships inside the package.
"""

from pathlib import Path
from typing import Optional

import yaml


# Directory holding constants.yaml, installed as package data
CONFIG_DIR = Path(__file__).parent

REQUIRED_SECTIONS = ('root_finding', 'estimation', 'sampling', 'scenario')

# Cached configuration data
_constants: Optional[dict] = None


def load_constants() -> dict:
    """
    Load constants from constants.yaml in CONFIG_DIR.

    Returns:
        Dict with root finding, estimation, sampling and scenario settings

    Raises:
        FileNotFoundError: If the constants file is missing
        KeyError: If a required section is missing
    """
    global _constants
    if _constants is not None:
        return _constants

    constants_path = CONFIG_DIR / "constants.yaml"
    if not constants_path.exists():
        raise FileNotFoundError(f"Constants config not found: {constants_path}")

    with open(constants_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    for section in REQUIRED_SECTIONS:
        if section not in data:
            raise KeyError(f"Missing section '{section}' in {constants_path}")

    _constants = data
    return _constants


def get_section(name: str) -> dict:
    """Get a top-level section of the constants file by name."""
    constants = load_constants()
    if name not in constants:
        available = ', '.join(sorted(constants.keys()))
        raise KeyError(f"Unknown config section '{name}'. Available: {available}")
    return constants[name]


def clear_cache():
    """Clear cached configuration data (useful for testing)."""
    global _constants
    _constants = None

"""SealKit Core - Shared utilities used by every transform.

Import specific functions from submodules:
    from sealkit.core.config import ConfigManager
    from sealkit.core import constants
    from sealkit.core import logging
    from sealkit.core import validators
"""

# Re-export main module references for convenience
from sealkit.core import config, constants, logging, validators

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]

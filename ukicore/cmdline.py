"""Kernel command-line entries for the UKI."""
from __future__ import annotations
from typing import List, Optional

from .config import Config
from .constants import CMDLINE_KEY, UKI_CMDLINE, UKI_CMDLINE_INSTALL

__all__ = ['get_uki_cmdline']

def get_uki_cmdline(config: Optional[Config] = None) -> List[str]:
    """Return the baseline install entry followed by one entry per configured fragment.

    Extra fragments come from the ``cmdline`` key in configuration order and
    do not get the install-mode suffix.
    """
    extras = config.get_list(CMDLINE_KEY) if config is not None else []
    entries = [f"{UKI_CMDLINE} {UKI_CMDLINE_INSTALL}"]
    entries.extend(f"{UKI_CMDLINE} {frag}" for frag in extras)
    return entries

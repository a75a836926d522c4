"""
Target group code normalization.

Target groups reach the engine as canonical codes ("IV-B"), as display names
copied into questionnaire metadata, or as free-text labels from older
screening records ("TANF recipients", "food stamps").
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from rules.target_groups import RuleCatalog

logger = logging.getLogger(__name__)

# Known synonyms and legacy labels, lower-cased
TARGET_GROUP_ALIASES: Mapping[str, str] = MappingProxyType({
    "tanf": "IV-B",  # short-term unless stated otherwise
    "tanf recipient": "IV-B",
    "tanf recipients": "IV-B",
    "tanf recipient (short-term)": "IV-B",
    "tanf recipient (long-term)": "IV-A",
    "long-term tanf": "IV-A",
    "veteran": "V",
    "veterans": "V",
    "qualified veteran": "V",
    "qualified veterans": "V",
    "disabled veteran": "V-DISABLED",
    "ex-felon": "VI",
    "ex-felons": "VI",
    "felon": "VI",
    "designated community resident": "VII",
    "community resident": "VII",
    "vocational rehabilitation": "VIII",
    "vocational rehabilitation referral": "VIII",
    "snap": "IX",
    "snap recipient": "IX",
    "snap recipients": "IX",
    "food stamps": "IX",
    "ssi": "X",
    "ssi recipient": "X",
    "ssi recipients": "X",
    "summer youth": "XI",
    "summer youth employee": "XI",
})


class CodeNormalizer:
    """Resolve a label to a catalog code; never raises."""

    def __init__(self, catalog: RuleCatalog, aliases: Optional[Mapping[str, str]] = None):
        self._catalog = catalog
        self._aliases = MappingProxyType(dict(TARGET_GROUP_ALIASES if aliases is None else aliases))
        self._by_display_name = MappingProxyType({
            category.display_name.lower().strip(): category.code for category in catalog
        })

    def normalize(self, label: Any) -> Optional[str]:
        if not isinstance(label, str) or not label.strip():
            return None

        if label in self._catalog:
            return label

        key = label.lower().strip()

        code = self._aliases.get(key)
        if code is not None and code in self._catalog:
            return code

        code = self._by_display_name.get(key)
        if code is not None:
            return code

        # Codes typed with stray whitespace or lower case ("iv-b ")
        upper = label.strip().upper()
        if upper in self._catalog:
            return upper

        logger.debug(f"Unrecognized target group label: {label!r}")
        return None

"""
Target Group Catalog Loader.

Loads WOTC target group definitions from YAML so that cap changes in a new
program year need a config update rather than a code change. Without a
``target_groups_<year>.yaml`` file the built-in catalog for the program year
is used.

File layout::

    _metadata:
      version: "2024.1"
      program_year: 2024
      source: IRS
    target_groups:
      - code: IV-A
        display_name: TANF Recipient (Long-term, 18+ months)
        max_credit: 9000
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from rules.default_target_groups import DEFAULT_PROGRAM_YEAR, get_default_catalog
from rules.target_groups import Category, CatalogValidationError, RuleCatalog

logger = logging.getLogger(__name__)

# Default config directory
CONFIG_DIR = Path(__file__).parent / "wotc_parameters"

_REQUIRED_FIELDS = ("code", "display_name", "max_credit", "min_hours_threshold", "qualified_wage_cap")
_OPTIONAL_FIELDS = ("second_year_wage_cap", "second_year_rate")


class CatalogLoadError(Exception):
    """Raised when a target group file cannot be read or is malformed."""
    pass


@dataclass
class CatalogMetadata:
    """Metadata about a target group file."""
    version: str = ""
    program_year: int = DEFAULT_PROGRAM_YEAR
    source: str = "IRS"
    effective_date: str = ""
    notes: str = ""


class CatalogLoader:
    """Reads target group YAML files into validated catalogs."""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Args:
            config_dir: Directory holding ``target_groups_<year>.yaml`` files.
                       Defaults to src/config/wotc_parameters/
        """
        self.config_dir = config_dir or CONFIG_DIR

    def load_file(self, path: Path) -> Tuple[RuleCatalog, CatalogMetadata]:
        """
        Load and validate one catalog file.

        Raises:
            CatalogLoadError: unreadable file, bad YAML or missing fields
            CatalogValidationError: definitions violate catalog invariants
        """
        path = Path(path)
        logger.info(f"Loading target groups from {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise CatalogLoadError(f"Cannot read target group file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise CatalogLoadError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("target_groups"), list):
            raise CatalogLoadError(f"{path} must define a 'target_groups' list")

        metadata = self._parse_metadata(data.get("_metadata"), path)
        categories = [self._parse_category(entry, path) for entry in data["target_groups"]]
        return RuleCatalog(categories), metadata

    def load_for_year(self, program_year: int = DEFAULT_PROGRAM_YEAR) -> RuleCatalog:
        """Year file from the config directory, else the built-in catalog."""
        year_file = self.config_dir / f"target_groups_{program_year}.yaml"
        if year_file.exists():
            catalog, _ = self.load_file(year_file)
            return catalog
        logger.warning(f"No target group file for {program_year}, using built-in catalog")
        return get_default_catalog(program_year)

    def _parse_metadata(self, raw: Any, path: Path) -> CatalogMetadata:
        if raw is None:
            return CatalogMetadata()
        if not isinstance(raw, dict):
            raise CatalogLoadError(f"{path}: '_metadata' must be a mapping")
        known = {k: raw[k] for k in CatalogMetadata.__dataclass_fields__ if k in raw}
        return CatalogMetadata(**known)

    def _parse_category(self, entry: Any, path: Path) -> Category:
        if not isinstance(entry, dict):
            raise CatalogLoadError(f"{path}: target group entries must be mappings")

        missing = [f for f in _REQUIRED_FIELDS if entry.get(f) is None]
        if missing:
            raise CatalogLoadError(
                f"{path}: target group {entry.get('code', '?')} missing {missing}"
            )

        fields: Dict[str, Any] = {f: entry[f] for f in _REQUIRED_FIELDS}
        for f in _OPTIONAL_FIELDS:
            if entry.get(f) is not None:
                fields[f] = str(entry[f])
        # Route floats through str so 0.5 stays Decimal('0.5')
        for f in ("max_credit", "qualified_wage_cap"):
            fields[f] = str(fields[f])
        try:
            return Category.create(**fields)
        except (ValueError, ArithmeticError, TypeError) as e:
            raise CatalogLoadError(f"{path}: bad values for {entry.get('code')}: {e}") from e


def load_catalog(
    catalog_file: Optional[Path] = None,
    program_year: int = DEFAULT_PROGRAM_YEAR,
    config_dir: Optional[Path] = None,
) -> RuleCatalog:
    """
    Build the catalog used at startup.

    An explicit file wins; otherwise the year file from the config
    directory, and the built-in catalog only when no year file exists.
    """
    loader = CatalogLoader(config_dir)
    if catalog_file is not None:
        catalog, metadata = loader.load_file(catalog_file)
        if metadata.program_year != program_year:
            logger.warning(
                f"Catalog file is for {metadata.program_year}, engine configured for {program_year}"
            )
        return catalog
    return loader.load_for_year(program_year)


__all__ = [
    "CatalogLoadError",
    "CatalogLoader",
    "CatalogMetadata",
    "CatalogValidationError",
    "load_catalog",
]

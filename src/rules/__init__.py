"""
WOTC Target Group Rules.

Provides the validated, read-only target group catalog consumed by the
screening evaluator and the credit calculator.
"""

from .target_groups import (
    Category,
    CatalogValidationError,
    RuleCatalog,
)
from .default_target_groups import (
    DEFAULT_PROGRAM_YEAR,
    SUMMER_YOUTH_CODE,
    get_default_catalog,
    get_default_target_groups,
)

__all__ = [
    'Category',
    'CatalogValidationError',
    'RuleCatalog',
    'DEFAULT_PROGRAM_YEAR',
    'SUMMER_YOUTH_CODE',
    'get_default_catalog',
    'get_default_target_groups',
]

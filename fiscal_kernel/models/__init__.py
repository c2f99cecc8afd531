"""ORM models for the period status store."""

from fiscal_kernel.models.fiscal_period import (
    FiscalPeriodModel,
    FiscalYearModel,
    SubledgerStatusModel,
)

__all__ = [
    "FiscalYearModel",
    "FiscalPeriodModel",
    "SubledgerStatusModel",
]

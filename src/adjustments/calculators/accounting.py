"""Accounting Reconciliation

Restates the comparable's line items onto the tested party's accounting
standard. net_adjustment = sum(adjusted_value - comparable_value), where an
item without an adjusted value contributes 0.
"""

import logging
from dataclasses import dataclass

from src.core.domain.entity import AccountingLineItem, AccountingStandard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountingReconciliationInput:
    tested_party_standard: AccountingStandard
    comparable_standard: AccountingStandard
    items: tuple[AccountingLineItem, ...] = ()


@dataclass(frozen=True)
class ReconciledItem:
    item: str
    comparable_value: float
    adjusted_value: float
    difference: float
    reason: str


@dataclass(frozen=True)
class AccountingReconciliationResult:
    net_adjustment: float  # currency
    items: tuple[ReconciledItem, ...]
    methodology: str


class AccountingReconciler:
    """Accounting standards reconciler (stateless)."""

    def reconcile(self, data: AccountingReconciliationInput) -> AccountingReconciliationResult:
        """Reconcile the comparable's line items.

        Args:
            data: both standards and the reconciling items

        Returns:
            AccountingReconciliationResult with per-item differences
        """
        reconciled = []
        for line in data.items:
            adjusted = line.effective_adjusted_value
            reconciled.append(
                ReconciledItem(
                    item=line.item,
                    comparable_value=line.comparable_value,
                    adjusted_value=adjusted,
                    difference=adjusted - line.comparable_value,
                    reason=line.adjustment_reason,
                )
            )

        net_adjustment = sum(r.difference for r in reconciled)

        tp_label = data.tested_party_standard.value.upper()
        comp_label = data.comparable_standard.value.upper()
        if reconciled:
            names = ", ".join(r.item for r in reconciled)
            methodology = (
                f"Accounting reconciliation from {comp_label} to {tp_label}. "
                f"Items reconciled: {names}"
            )
        else:
            methodology = (
                f"Accounting reconciliation from {comp_label} to {tp_label}. "
                "No reconciling items supplied"
            )

        logger.debug("accounting: %d items net=%.2f", len(reconciled), net_adjustment)

        return AccountingReconciliationResult(
            net_adjustment=net_adjustment,
            items=tuple(reconciled),
            methodology=methodology,
        )

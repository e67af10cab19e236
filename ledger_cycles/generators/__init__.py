"""Ledger entry generators."""

from ledger_cycles.generators.base import BaseGenerator
from ledger_cycles.generators.installments import InstallmentSeriesGenerator, split_amount

__all__ = ["BaseGenerator", "InstallmentSeriesGenerator", "split_amount"]

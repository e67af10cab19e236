"""Installment series generation for multi-month purchases."""

import logging
from dataclasses import replace
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from ledger_cycles.cycles import NOON, add_months, normalize_date
from ledger_cycles.generators.base import BaseGenerator
from ledger_cycles.models.ledger import AmountMode, Entry, InstallmentLink, RoundingPolicy

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def split_amount(
    amount: Decimal,
    count: int,
    amount_mode: AmountMode,
    rounding_policy: RoundingPolicy = RoundingPolicy.INDEPENDENT,
) -> list[Decimal]:
    """Compute the amount of each installment.

    Each installment is rounded to cents on its own, so a TOTAL split
    such as 100 / 3 yields three 33.33 and leaves a 0.01 residual
    against the nominal total. With ``LAST_ABSORBS`` the base amount is
    truncated to cents and the final installment takes the non-negative
    remainder instead.

    Example:
        split_amount(Decimal("100"), 3, AmountMode.TOTAL)
        -> [33.33, 33.33, 33.33]
        split_amount(Decimal("100"), 3, AmountMode.TOTAL, RoundingPolicy.LAST_ABSORBS)
        -> [33.33, 33.33, 33.34]
    """
    count = max(count, 1)
    absorb = rounding_policy == RoundingPolicy.LAST_ABSORBS and amount_mode == AmountMode.TOTAL
    if amount_mode == AmountMode.TOTAL:
        rounding = ROUND_DOWN if absorb else ROUND_HALF_UP
        per_installment = (amount / count).quantize(CENT, rounding=rounding)
    else:
        per_installment = amount.quantize(CENT, rounding=ROUND_HALF_UP)

    amounts = [per_installment] * count

    if absorb:
        nominal = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        amounts[-1] = nominal - per_installment * (count - 1)

    return amounts


class InstallmentSeriesGenerator(BaseGenerator):
    """Expand one purchase template into a linked series of monthly entries."""

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "pt_BR",
        rounding_policy: RoundingPolicy = RoundingPolicy.INDEPENDENT,
        normalized_hour: int = NOON,
    ) -> None:
        super().__init__(seed, locale)
        self.rounding_policy = rounding_policy
        self.normalized_hour = normalized_hour

    @classmethod
    def from_config(cls, config) -> "InstallmentSeriesGenerator":
        """Build a generator from a :class:`~ledger_cycles.config.LedgerConfig`."""
        return cls(
            seed=config.seed,
            locale=config.locale,
            rounding_policy=config.installments.rounding_policy,
            normalized_hour=config.dates.normalized_hour,
        )

    def generate(
        self,
        template: Entry,
        count: int,
        amount_mode: AmountMode = AmountMode.PER_INSTALLMENT,
    ) -> list[Entry]:
        """Generate the entries of an installment purchase.

        Parameters
        ----------
        template : Entry
            Carries description, category, kind, card reference and the
            anchor amount and date of the first installment.
        count : int
            Number of installments. Values below 1 are treated as 1.
        amount_mode : AmountMode
            Whether ``template.amount`` is the purchase total or the
            amount of each installment.

        Returns
        -------
        list[Entry]
            ``count`` entries sharing one group id, dated one calendar
            month apart starting at the anchor date.
        """
        anchor = normalize_date(template.date, self.normalized_hour)

        if count <= 1:
            return [
                replace(
                    template,
                    entry_id=template.entry_id or self.new_id(),
                    date=anchor,
                    installment=None,
                )
            ]

        amounts = split_amount(template.amount, count, amount_mode, self.rounding_policy)
        group_id = self.new_id()

        entries = [
            replace(
                template,
                entry_id=self.new_id(),
                amount=amounts[i],
                date=add_months(anchor, i),
                installment=InstallmentLink(group_id=group_id, position=i + 1, count=count),
            )
            for i in range(count)
        ]

        logger.info(
            "Generated %d installments for %r (group %s, %s mode)",
            count,
            template.description,
            group_id,
            amount_mode.value,
            extra={"group_id": group_id},
        )
        return entries

"""Synthetic loan generator for demos and tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

from loantrack.generators.base import BaseGenerator
from loantrack.models.loan import Loan
from loantrack.records import resolve_today


class LoanGenerator(BaseGenerator):
    """Generate realistic informal loans."""

    # Common informal-lending rates in percent; None is an interest-free loan
    INTEREST_RATES = [None, None, None, Decimal("5"), Decimal("10"), Decimal("15"), Decimal("20")]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        lender_pool_size: int = 8,
    ) -> None:
        super().__init__(seed, locale)
        self._lenders = [
            (self.fake.name(), self._phone_number()) for _ in range(lender_pool_size)
        ]

    def _phone_number(self) -> str:
        return "+" + self.fake.msisdn()

    def generate(
        self,
        now: date | datetime | None = None,
        is_paid: bool = False,
        days_from_today: int | None = None,
    ) -> Loan:
        """Generate one loan.

        Parameters
        ----------
        now : date | datetime | None
            Reference date for the repayment date.
        is_paid : bool
            Paid flag of the generated loan.
        days_from_today : int | None
            Repayment date offset; random within +/- 6 months when omitted.

        Returns
        -------
        Loan
            Generated loan.
        """
        today = resolve_today(now)
        if days_from_today is None:
            days_from_today = self.rng.randint(-180, 180)

        lender_name, phone_number = self.rng.choice(self._lenders)

        return Loan(
            loan_id=self.fake.uuid4(),
            lender_name=lender_name,
            phone_number=phone_number,
            amount=Decimal(self.rng.randint(1, 500) * 1000),
            repayment_date=today + timedelta(days=days_from_today),
            interest_rate=self.rng.choice(self.INTEREST_RATES),
            is_paid=is_paid,
        )

    def generate_portfolio(
        self,
        count: int,
        now: date | datetime | None = None,
        paid_rate: float = 0.4,
        overdue_rate: float = 0.2,
    ) -> list[Loan]:
        """Generate a mix of paid, overdue and pending loans.

        Parameters
        ----------
        count : int
            Number of loans.
        now : date | datetime | None
            Reference date that decides which loans are overdue.
        paid_rate : float
            Share of loans marked paid (0.0 to 1.0).
        overdue_rate : float
            Share of loans unpaid with a past repayment date.

        Returns
        -------
        list[Loan]
            Generated loans.
        """
        loans = []
        for _ in range(count):
            roll = self.rng.random()
            if roll < paid_rate:
                offset = self.rng.randint(-365, 30)
                loans.append(self.generate(now, is_paid=True, days_from_today=offset))
            elif roll < paid_rate + overdue_rate:
                loans.append(self.generate(now, days_from_today=-self.rng.randint(1, 120)))
            else:
                loans.append(self.generate(now, days_from_today=self.rng.randint(0, 365)))
        return loans

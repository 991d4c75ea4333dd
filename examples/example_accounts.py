"""Demonstrates fixtures with constructor arguments, hooks and data providers.

Run with ``python examples/example_accounts.py -v``.
"""

import femtotest as ft
from femtotest import assertions as check


class Account:
    def __init__(self, opening: int) -> None:
        self.balance = opening
        self.history: list[int] = []

    def deposit(self, amount: int) -> None:
        if amount <= 0:
            raise ValueError("Deposit must be positive")
        self.balance += amount
        self.history.append(amount)

    def withdraw(self, amount: int) -> None:
        if amount > self.balance:
            raise ValueError("Insufficient funds")
        self.balance -= amount
        self.history.append(-amount)


@ft.provider
def refunds():
    return [5, 20]


# One fixture instance per opening balance.
@ft.fixture(0)
@ft.fixture(source="openings")
class AccountFixture:
    def __init__(self, opening: int) -> None:
        self.opening = opening

    @staticmethod
    def openings():
        return [100, 1_000]

    @ft.fixture_setup
    def announce(self):
        print(f"Fixture for opening balance {self.opening}")

    @ft.setup
    def open_account(self):
        self.account = Account(self.opening)

    @ft.test(10)
    @ft.test(source="amounts")
    @ft.test(source="refunds")
    def deposit_increases_balance(self, amount):
        self.account.deposit(amount)
        check.are_equal(self.account.balance, self.opening + amount)
        check.contains(self.account.history, amount)

    def amounts(self):
        return [(1,), (self.opening + 1,)]

    @ft.test()
    def rejects_negative_deposits(self):
        err = check.throws(ValueError, lambda: self.account.deposit(-1))
        check.contains(str(err), "positive")

    @ft.test()
    def overdraw_is_refused(self):
        check.throws(ValueError, lambda: self.account.withdraw(self.opening + 1))
        check.are_equal(self.account.balance, self.opening)

    @ft.test()
    def history_round_trip(self):
        self.account.deposit(50)
        self.account.withdraw(20)
        check.all_items_are_equal(self.account.history, [50, -20])
        check.are_equivalent([-20, 50], self.account.history)

    @ft.teardown
    def close_account(self):
        check.greater_or_equal(self.account.balance, 0)


if __name__ == "__main__":
    raise SystemExit(ft.run_main())

"""A bank account whose balance is safe for concurrent use."""

from __future__ import annotations

import argparse
import threading


class Bank:
    """A single account balance guarded by a lock."""

    def __init__(self, balance: int = 0) -> None:
        self._balance = balance
        self._lock = threading.Lock()

    def deposit(self, amount: int) -> None:
        """Add ``amount`` to the balance."""
        with self._lock:
            self._balance += amount

    def balance(self) -> int:
        """Return the current balance."""
        with self._lock:
            return self._balance

    def withdraw(self, amount: int) -> bool:
        """Take ``amount`` out if the funds cover it; report whether it succeeded."""
        with self._lock:
            if amount > self._balance:
                return False
            self._balance -= amount
            return True


def main(argv: list[str] | None = None) -> int:
    """Deposit 1..n concurrently and print the final balance."""
    parser = argparse.ArgumentParser(prog="bank")
    parser.add_argument("-n", type=int, default=100, help="number of depositors")
    args = parser.parse_args(argv)

    bank = Bank()
    threads = [
        threading.Thread(target=bank.deposit, args=(amount,))
        for amount in range(1, args.n + 1)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    print(bank.balance())
    return 0
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from progkit.bank import Bank, TellerBank


def test_teller_bank_alice_and_bob():
    seen = []
    with TellerBank() as bank:

        def alice():
            bank.deposit(200)
            seen.append(bank.balance())

        def bob():
            bank.deposit(100)

        threads = [threading.Thread(target=alice), threading.Thread(target=bob)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert bank.balance() == 300
    assert seen[0] in (200, 300)


def test_teller_bank_many_concurrent_deposits():
    with TellerBank() as bank:
        with ThreadPoolExecutor(max_workers=50) as pool:
            list(pool.map(bank.deposit, range(1, 1001)))
        assert bank.balance() == (1000 + 1) * 1000 // 2


def test_teller_bank_starts_empty():
    with TellerBank() as bank:
        assert bank.balance() == 0


def test_teller_bank_rejects_requests_after_close():
    bank = TellerBank()
    bank.deposit(5)
    bank.close()
    with pytest.raises(RuntimeError):
        bank.deposit(1)
    with pytest.raises(RuntimeError):
        bank.balance()


def test_teller_bank_close_is_idempotent():
    bank = TellerBank()
    bank.close()
    bank.close()
    with pytest.raises(RuntimeError):
        bank.balance()


def test_bank_concurrent_deposits():
    bank = Bank()
    threads = [
        threading.Thread(target=bank.deposit, args=(amount,))
        for amount in range(1, 1001)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert bank.balance() == (1000 + 1) * 1000 // 2


def test_bank_sequential_deposits():
    bank = Bank()
    assert bank.balance() == 0
    bank.deposit(200)
    bank.deposit(100)
    assert bank.balance() == 300
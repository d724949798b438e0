import io
import threading
import time

import pytest

from oolab.concurrency import (
    CircularBuffer,
    Counter,
    Odometer,
    SpinMutex,
    StartGate,
    consumer,
    main,
    producer,
    run_workers,
)


def quiet_buffer(capacity):
    return CircularBuffer(capacity, out=io.StringIO())


def test_buffer_is_fifo():
    buffer = quiet_buffer(5)
    for value in ("a", "b", "c"):
        buffer.deposit(value)
    assert [buffer.fetch() for _ in range(3)] == ["a", "b", "c"]
    assert len(buffer) == 0


def test_buffer_wraps_around_preserving_order():
    buffer = quiet_buffer(3)
    fetched = []
    for value in range(10):
        buffer.deposit(value)
        if len(buffer) == 3:
            fetched.append(buffer.fetch())
    while len(buffer):
        fetched.append(buffer.fetch())
    assert fetched == list(range(10))


def test_buffer_reports_counts():
    out = io.StringIO()
    buffer = CircularBuffer(20, out=out)
    buffer.deposit(1000)
    buffer.fetch()
    assert out.getvalue().splitlines() == [
        "Deposited\t1000 count\t1",
        "Fetched  \t1000 count\t0",
    ]


def test_buffer_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        CircularBuffer(0)


def test_deposit_blocks_while_full():
    buffer = quiet_buffer(1)
    buffer.deposit("first")
    thread = threading.Thread(target=buffer.deposit, args=("second",))
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()
    assert buffer.fetch() == "first"
    thread.join(5)
    assert not thread.is_alive()
    assert buffer.fetch() == "second"


def test_fetch_blocks_while_empty():
    buffer = quiet_buffer(2)
    results = []
    thread = threading.Thread(target=lambda: results.append(buffer.fetch()))
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()
    buffer.deposit("late")
    thread.join(5)
    assert results == ["late"]


def test_producers_and_consumers_exchange_every_item():
    buffer = quiet_buffer(20)
    fetched = []
    fetched_lock = threading.Lock()

    def consume(ident):
        values = consumer(ident, buffer, 30, 0)
        with fetched_lock:
            fetched.extend(values)

    threads = [threading.Thread(target=consume, args=(ident,)) for ident in range(3)]
    threads += [
        threading.Thread(target=producer, args=(ident, buffer, 45, 0)) for ident in (1000, 2000)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(10)
    produced = [ident + offset for ident in (1000, 2000) for offset in range(45)]
    assert sorted(fetched) == sorted(produced)
    assert len(buffer) == 0


def test_producer_deposits_consecutive_values():
    buffer = quiet_buffer(10)
    producer(7, buffer, 4, 0)
    assert consumer(0, buffer, 4, 0) == [7, 8, 9, 10]


def test_atomic_counter_counts_every_increment():
    counter = Counter()
    threads, per_thread = 5, 100

    def work():
        for _ in range(per_thread):
            counter.increment()

    run_workers(work, threads)
    assert counter.value == threads * per_thread


def test_non_atomic_counter_counts_single_thread():
    counter = Counter(atomic=False)
    for _ in range(3):
        counter.increment()
    assert counter.value == 3


def test_odometer_accumulates_from_threads():
    odometer = Odometer()
    threads, per_thread = 5, 1000
    run_workers(lambda: odometer.add_counts(per_thread), threads)
    assert odometer.counts == threads * per_thread


def test_odometer_ignores_non_positive_counts():
    odometer = Odometer()
    odometer.add_counts(-4)
    odometer.add_counts(0)
    assert odometer.counts == 0


def test_spin_mutex_lock_and_unlock():
    mutex = SpinMutex()
    mutex.lock()
    assert mutex.locked
    mutex.unlock()
    assert not mutex.locked


def test_spin_mutex_unlock_when_free_raises():
    with pytest.raises(RuntimeError):
        SpinMutex().unlock()


def test_spin_mutex_gives_mutual_exclusion():
    mutex = SpinMutex()
    state = {"value": 0}
    threads, per_thread = 4, 50

    def work():
        for _ in range(per_thread):
            with mutex:
                current = state["value"]
                time.sleep(0)
                state["value"] = current + 1

    run_workers(work, threads)
    assert state["value"] == threads * per_thread
    assert not mutex.locked


def test_start_gate_holds_threads_until_release():
    gate = StartGate()
    passed = []
    passed_lock = threading.Lock()

    def wait_then_record(ident):
        gate.wait()
        with passed_lock:
            passed.append(ident)

    threads = [threading.Thread(target=wait_then_record, args=(i,)) for i in range(4)]
    for thread in threads:
        thread.start()
    time.sleep(0.1)
    assert passed == []
    assert not gate.is_open
    gate.release()
    for thread in threads:
        thread.join(5)
    assert sorted(passed) == [0, 1, 2, 3]


def test_start_gate_wait_after_release_returns():
    gate = StartGate()
    gate.release()
    thread = threading.Thread(target=gate.wait)
    thread.start()
    thread.join(5)
    assert not thread.is_alive()
    assert gate.is_open


def test_run_workers_collects_results():
    assert run_workers(lambda: "done", 3) == ["done", "done", "done"]


def test_run_workers_with_no_workers():
    assert run_workers(lambda: "unused", 0) == []


def test_run_workers_reraises_worker_error():
    def fail():
        raise KeyError("boom")

    with pytest.raises(KeyError):
        run_workers(fail, 2)


def test_run_workers_rejects_negative_count():
    with pytest.raises(ValueError):
        run_workers(lambda: None, -1)


def test_main_counter(capsys):
    assert main(["counter"]) == 0
    assert capsys.readouterr().out.strip() == "500"


def test_main_gate(capsys):
    assert main(["gate", "--scale", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "threads ready to race..."
    assert sorted(lines[1:]) == [f"Thread {i}" for i in range(4)]


def test_main_buffer_balances_deposits_and_fetches(capsys):
    assert main(["buffer", "--scale", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    deposited = [line for line in lines if line.startswith("Deposited")]
    fetched = [line for line in lines if line.startswith("Fetched")]
    assert len(deposited) == len(fetched)
    assert lines[-1].endswith("count\t0")
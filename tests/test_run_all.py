import pytest

from tickmatch.run_all import main


@pytest.fixture(scope="module")
def output():
    import contextlib
    import io

    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        code = main([])
    return code, buffer.getvalue().splitlines()


def test_returns_zero(output):
    code, _ = output
    assert code == 0


def test_all_sections_in_order(output):
    _, lines = output
    headers = [line.strip() for line in lines if line.strip().startswith("== ")]
    assert headers == [
        "== basic_threads ==",
        "== shared_state ==",
        "== send_sync ==",
        "== atomics ==",
        "== atomics_deep_dive ==",
        "== thread_lifecycle ==",
        "== green_threads_async ==",
        "== channels_patterns ==",
        "== deadlock_patterns ==",
        "== thread_pool ==",
    ]


def test_claim_once_only_first_wins(output):
    _, lines = output
    assert "claim_once #1: true" in lines
    assert "claim_once #2: false" in lines


def test_once_value_keeps_first_initialiser(output):
    _, lines = output
    assert "once get_or_init first: 555" in lines
    assert "once get_or_init second: 555" in lines


def test_publication_and_join_results(output):
    _, lines = output
    assert "release_acquire_publication(123): 123" in lines
    assert "clean join result: 42" in lines
    assert "cas_increment after 10 calls: 10" in lines


def test_transfer_total_is_preserved(output):
    _, lines = output
    assert "concurrent transfer total balance (should remain 2000): 2000" in lines


def test_async_outputs_are_complete(output):
    _, lines = output
    assert f"async worker outputs: {list(range(1, 9))}" in lines


def test_counters_agree(output):
    _, lines = output
    values = dict(line.split(": ", 1) for line in lines if ": " in line)
    assert values["mutex counter"] == values["atomic counter"] == values["relaxed_counter"]
    assert int(values["cooperative shutdown loops observed"]) > 0
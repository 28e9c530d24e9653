from tickmatch.atomics_lab import main


def _run(capsys):
    main([])
    return capsys.readouterr().out.splitlines()


def test_prints_counter_results(capsys):
    lines = _run(capsys)
    assert "atomic_counter(4,1000): 4000" in lines
    assert "relaxed_counter(4,1000): 4000" in lines
    assert "release_acquire_publication(42): 42" in lines


def test_prints_cas_and_spin_lock_results(capsys):
    lines = _run(capsys)
    assert "cas counter after 4000 increments: 4000" in lines
    assert "spin lock protected value: 2000" in lines


def test_prints_once_values(capsys):
    lines = _run(capsys)
    assert f"once values: {[777] * 8}" in lines


def test_sections_in_order(capsys):
    lines = _run(capsys)
    headers = [line for line in lines if line.startswith("==")]
    assert headers == [
        "== atomics basics ==",
        "== CAS loop increment ==",
        "== spin lock demo ==",
        "== once init demo ==",
    ]
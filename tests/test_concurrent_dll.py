import threading

from tickmatch.concurrent_dll import ConcurrentDll


def _values_forward(lst):
    out = []
    node = lst.head()
    while node is not None:
        out.append(node.read_value())
        node = node.next()
    return out


def test_push_and_pop_preserve_links():
    lst = ConcurrentDll()
    n1 = lst.push_back(1)
    n2 = lst.push_back(2)
    n3 = lst.push_back(3)

    assert n1.read_value() == 1
    assert n2.read_value() == 2
    assert n3.read_value() == 3

    assert n1.prev() is None
    assert n1.next().read_value() == 2
    assert n2.prev().read_value() == 1
    assert n2.next().read_value() == 3
    assert n3.prev().read_value() == 2
    assert n3.next() is None

    popped = lst.pop_front()
    assert popped.read_value() == 1
    assert len(lst) == 2
    assert lst.head().read_value() == 2


def test_concurrent_push_back_keeps_consistent_length():
    lst = ConcurrentDll()

    def work(i):
        for j in range(250):
            lst.push_back(i * 1_000 + j)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(lst) == 2_000
    assert lst.head() is not None
    assert lst.tail() is not None
    assert len(_values_forward(lst)) == 2_000


def test_push_front_orders_newest_first():
    lst = ConcurrentDll()
    lst.push_front(1)
    lst.push_front(2)
    lst.push_front(3)
    assert _values_forward(lst) == [3, 2, 1]
    assert lst.tail().read_value() == 1


def test_pop_back_returns_last_and_relinks():
    lst = ConcurrentDll()
    for v in (1, 2, 3):
        lst.push_back(v)
    popped = lst.pop_back()
    assert popped.read_value() == 3
    assert popped.prev() is None
    assert lst.tail().read_value() == 2
    assert lst.tail().next() is None
    assert len(lst) == 2


def test_pops_on_empty_list_return_none():
    lst = ConcurrentDll()
    assert lst.pop_front() is None
    assert lst.pop_back() is None
    assert len(lst) == 0


def test_popping_last_node_empties_list():
    lst = ConcurrentDll()
    lst.push_back(7)
    assert lst.pop_back().read_value() == 7
    assert lst.head() is None
    assert lst.tail() is None
    assert len(lst) == 0


def test_write_value_replaces_payload():
    lst = ConcurrentDll()
    node = lst.push_back(1)
    node.write_value(9)
    assert lst.head().read_value() == 9
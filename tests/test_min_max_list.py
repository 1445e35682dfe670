import pytest

from hedgesim.min_max_list import MinMaxList


def test_empty_has_no_extremes():
    mml = MinMaxList(3)
    assert mml.find_min() is None
    assert mml.find_max() is None
    assert mml.values == [None, None, None]


def test_tracks_min_and_max():
    mml = MinMaxList(6)
    data = [3.5, -1.25, 7.0, 0.0, 7.0, -1.25]
    for value in data:
        mml.append(value)
    assert mml.find_min() == min(data)
    assert mml.find_max() == max(data)
    assert mml.values == data
    assert len(mml) == len(data)


def test_appends_beyond_capacity_are_ignored():
    mml = MinMaxList(2)
    for value in [1.0, 2.0, 100.0, -100.0]:
        mml.append(value)
    assert mml.values == [1.0, 2.0]
    assert mml.find_min() == 1.0
    assert mml.find_max() == 2.0
    assert len(mml) == mml.capacity


def test_zero_capacity_stays_empty():
    mml = MinMaxList(0)
    mml.append(5.0)
    assert mml.find_min() is None
    assert mml.values == []


@pytest.mark.parametrize(
    "data", [[5.0], [2.0, 1.0], [-3.0, -4.0, -2.0], [0.1, 0.2, 0.3, 0.05]]
)
def test_extremes_match_builtins(data):
    mml = MinMaxList(len(data) + 1)
    for value in data:
        mml.append(value)
    assert mml.find_min() == min(data)
    assert mml.find_max() == max(data)
    assert mml.values[-1] is None
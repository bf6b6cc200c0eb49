import pytest

from seqalign.matrix import DPMatrix


def test_shape_and_entries():
    matrix = DPMatrix("ab", "xyz")
    assert matrix.shape == (3, 4)
    assert matrix[2, 3] == 0
    matrix[2, 3] = 17
    assert matrix[2, 3] == 17
    assert matrix.rows[2][3] == 17
    assert repr(matrix) == "DPMatrix(shape=(3, 4))"


def test_rows_are_independent():
    matrix = DPMatrix("ab", "ab", fill=5)
    matrix[0, 0] = 0
    assert matrix[1, 0] == 5


def test_str():
    matrix = DPMatrix("ab", "xy", fill=-1)
    lines = str(matrix).splitlines()
    # header plus one line per row
    assert len(lines) == 4
    assert lines[0].split() == ["x", "y"]
    assert lines[1].split() == ["-1", "-1", "-1"]
    assert lines[2].split() == ["a", "-1", "-1", "-1"]
    assert lines[3].split() == ["b", "-1", "-1", "-1"]


def test_str_blank():
    matrix = DPMatrix("ab", "xy", fill=99, blank=99)
    matrix[0, 0] = 0
    matrix[1, 1] = 1
    text = str(matrix)
    assert "99" not in text
    assert text.splitlines()[2].split() == ["a", "1"]


def test_str_floats_and_words():
    matrix = DPMatrix(["the", "cat"], ["dog"], fill=0.5)
    lines = str(matrix).splitlines()
    assert lines[0].split() == ["dog"]
    assert lines[1].split() == ["0.5", "0.5"]
    assert lines[3].split() == ["cat", "0.5", "0.5"]


def test_empty():
    matrix = DPMatrix("", "")
    assert matrix.shape == (1, 1)
    assert str(matrix).splitlines()[1].split() == ["0"]


@pytest.mark.parametrize("index", [(3, 0), (0, 3)])
def test_out_of_range(index):
    matrix = DPMatrix("ab", "xy")
    with pytest.raises(IndexError):
        matrix[index]

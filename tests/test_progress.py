from osdconfig.progress import BLOCK, ProgressBar


def _bar(**kwargs):
    return ProgressBar(filled_char="#", empty_char=".", **kwargs)


def test_defaults():
    bar = ProgressBar()
    assert bar.maximum == 100
    assert bar.progress == 0
    assert bar.filled_char == BLOCK
    assert not bar.complete


def test_progress_is_clamped():
    bar = ProgressBar(maximum=10)
    bar.progress = 25
    assert bar.progress == bar.maximum
    bar.progress = -3
    assert bar.progress == 0


def test_add_progress_accumulates_and_clamps():
    bar = ProgressBar(maximum=10)
    bar.add_progress(4)
    bar.add_progress(4)
    assert bar.progress == 8
    bar.add_progress(100)
    assert bar.progress == 10
    assert bar.complete
    bar.add_progress(-100)
    assert bar.progress == 0


def test_horizontal_half():
    bar = _bar(maximum=10)
    bar.progress = 5
    assert bar.render(4, 2) == ["##..", "##.."]


def test_rows_have_requested_shape():
    bar = _bar(maximum=7)
    bar.progress = 3
    rows = bar.render(13, 3)
    assert len(rows) == 3
    assert all(len(row) == 13 for row in rows)


def test_full_and_empty():
    bar = _bar(maximum=10)
    assert bar.render(5, 1) == ["." * 5]
    bar.progress = 10
    assert bar.render(5, 1) == ["#" * 5]


def test_round_half_to_even():
    bar = _bar(maximum=10)
    bar.progress = 5
    assert bar.render(5, 1)[0].count("#") == 2


def test_vertical_fills_from_bottom():
    bar = _bar(maximum=4, vertical=True)
    bar.progress = 2
    rows = bar.render(3, 4)
    assert rows[-1] == "###"
    assert rows[0] == "..."
    filled_rows = [row for row in rows if row.startswith("#")]
    assert rows[len(rows) - len(filled_rows):] == filled_rows
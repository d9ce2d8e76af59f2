"""Sizing and drawing of the log view."""

import pytest
from rich.segment import Segment

from ui.canvas import Canvas, Size
from ui.log_line import LogLine, format_record
from ui.log_view import LogView, ViewOptions
from utils.logger import Level


def _draw(store, width, height, indent=True):
    canvas = Canvas(width, height)
    LogView(store, ViewOptions(indent=indent)).draw(canvas)
    return [canvas.row_text(y).rstrip() for y in range(height)]


def test_default_options_indent():
    assert ViewOptions().indent is True


def test_empty_store_sizing(store):
    view = LogView(store)

    assert view.required_size(Size(0, 0)) == Size(1, 0)
    assert view.required_size(Size(5, 3)) == Size(5, 3)


def test_sizing_measures_widest_line_and_total_rows(store, plain_line):
    store.append(plain_line("abc"))
    store.append(plain_line("one\ntwo\nthree-and-more"))
    view = LogView(store)

    assert view.required_size(Size(0, 0)) == Size(10 + len("three-and-more"), 4)


def test_sizing_never_below_constraint(store, plain_line):
    store.append(plain_line("abc"))
    view = LogView(store)

    assert view.required_size(Size(80, 24)) == Size(80, 24)
    assert view.required_size(Size(5, 0)) == Size(13, 1)


def test_sizing_is_idempotent(store, plain_line):
    store.append(plain_line("x\ny"))
    view = LogView(store)

    assert view.required_size(Size(3, 1)) == view.required_size(Size(3, 1))


def test_sizing_uses_display_width(store):
    store.append(LogLine((Segment("日本語"),)))

    assert LogView(store).required_size(Size(0, 0)) == Size(6, 1)


def test_row_expansion(store):
    store.append(LogLine((Segment("[pfx] "), Segment("a\nb\nc\nd"))))

    assert LogView(store).required_size(Size(0, 0)).height == 4
    assert len([r for r in _draw(store, 20, 4) if r]) == 4


@pytest.mark.parametrize("indent,second", [
    (True, " " * 10 + "second"),
    (False, "second"),
])
def test_indent_toggle(store, plain_line, indent, second):
    store.append(plain_line("first\nsecond"))

    rows = _draw(store, 20, 2, indent=indent)

    assert rows[0] == "0123456789first"
    assert rows[1] == second


def test_views_share_store_with_own_options(store, plain_line):
    store.append(plain_line("first\nsecond"))
    indented, flush = Canvas(20, 2), Canvas(20, 2)

    LogView(store, ViewOptions(indent=True)).draw(indented)
    LogView(store, ViewOptions(indent=False)).draw(flush)

    assert indented.row_text(1).startswith(" " * 10 + "second")
    assert flush.row_text(1).startswith("second")


def test_warn_worker_scenario(store, make_record):
    record = make_record("disk at 92%\nretry in 5s", level=Level.WARN, thread_name="worker")
    store.append(format_record(record))
    prefix = "03:04:05.678 [worker] WARN <(unnamed):0> "

    indented = _draw(store, 80, 2, indent=True)
    assert indented == [prefix + "disk at 92%", " " * len(prefix) + "retry in 5s"]

    flush = _draw(store, 80, 2, indent=False)
    assert flush == [prefix + "disk at 92%", "retry in 5s"]


def test_styles_are_applied_per_segment(store, make_record):
    store.append(format_record(make_record("boom", level=Level.ERROR)))
    canvas = Canvas(60, 1)
    LogView(store).draw(canvas)
    red = format_record(make_record(level=Level.ERROR)).body.style

    assert canvas.style_at(0, 0) == red
    assert canvas.style_at(12, 0) is None


def test_draw_skips_lines_that_do_not_fit(store):
    for i in range(5):
        store.append(LogLine((Segment(f"line {i}"),)))

    assert _draw(store, 10, 3) == ["line 2", "line 3", "line 4"]


def test_draw_bottom_aligns_a_partly_visible_line(store):
    store.append(LogLine((Segment("a\nb\nc"),)))
    store.append(LogLine((Segment("new"),)))

    assert _draw(store, 10, 2) == ["c", "new"]


def test_short_content_starts_at_top(store):
    store.append(LogLine((Segment("only"),)))

    assert _draw(store, 10, 3) == ["only", "", ""]


def test_empty_body_takes_one_row(store, plain_line):
    store.append(plain_line(""))
    store.append(plain_line("next", prefix=""))

    assert LogView(store).required_size(Size(0, 0)).height == 2
    assert _draw(store, 20, 2) == ["0123456789", "next"]


def test_zero_width_segments_do_not_advance(store):
    store.append(LogLine((Segment(""), Segment("ab"), Segment(""), Segment("cd"))))

    assert _draw(store, 10, 1) == ["abcd"]


def test_wide_characters_advance_two_columns(store):
    store.append(LogLine((Segment("日本"), Segment("x\ny"))))

    rows = _draw(store, 10, 2)

    assert rows[0] == "日本x"
    assert rows[1] == " " * 4 + "y"


def test_combining_sequences_survive_drawing(store):
    store.append(LogLine((Segment("pfx "), Segment("cafe\u0301 नमस्ते"))))

    row = _draw(store, 30, 1)[0]

    assert row == "pfx cafe\u0301 नमस्ते"
    assert "\u0301" in row and "\u094d" in row

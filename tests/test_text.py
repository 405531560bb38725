import numpy as np
import pytest

from glyphgrid.errors import InvalidDimensions
from glyphgrid.text import Effects, apply_effects, hard_wrap, jitter_line, scanline

SAMPLE = "@@##  ..\n%% ?? **\nab cd ef\n  xyz   "


def test_hard_wrap_short_lines_unchanged():
    assert hard_wrap("abc\nde", 5) == "abc\nde"


def test_hard_wrap_cuts_long_lines():
    assert hard_wrap("abcdefg\nhi", 3) == "abc\ndef\ng\nhi"


@pytest.mark.parametrize("width", [1, 2, 3, 7, 40])
def test_hard_wrap_preserves_content(width):
    text = "0123456789abcdef\n\nshort\n" + "x" * 33
    wrapped = hard_wrap(text, width)
    assert all(len(line) <= width for line in wrapped.split("\n"))
    assert wrapped.replace("\n", "") == text.replace("\n", "")


def test_hard_wrap_rejects_zero_width():
    with pytest.raises(InvalidDimensions):
        hard_wrap("abc", 0)


def test_scanline_keeps_spaces():
    assert scanline("a b  c") == ". .  ."


def test_scanlines_only_touch_odd_rows():
    out = apply_effects(SAMPLE, Effects(scanlines=True)).split("\n")
    src = SAMPLE.split("\n")
    assert out[0] == src[0]
    assert out[2] == src[2]
    assert out[1] == ".. .. .."
    assert out[3] == "  ...   "


def test_scanlines_idempotent():
    once = apply_effects(SAMPLE, Effects(scanlines=True))
    assert apply_effects(once, Effects(scanlines=True)) == once


def test_no_effects_is_identity():
    assert apply_effects(SAMPLE, Effects()) == SAMPLE


@pytest.mark.parametrize(
    "shift,expected",
    [(0, "abcde"), (1, " abcd"), (2, "  abc"), (-1, "bcde "), (-2, "cde  ")],
)
def test_jitter_line(shift, expected):
    assert jitter_line("abcde", shift) == expected


def test_jitter_line_shorter_than_shift():
    assert jitter_line("a", 2) == " "
    assert jitter_line("a", -2) == " "
    assert jitter_line("", 2) == ""


def test_jitter_preserves_row_lengths():
    gen = np.random.default_rng(0)
    text = "abcdef\nxy\n\n0123456789"
    lengths = [len(line) for line in text.split("\n")]
    for _ in range(50):
        out = apply_effects(text, Effects(jitter=True), gen)
        assert [len(line) for line in out.split("\n")] == lengths


def test_jitter_shift_is_bounded():
    gen = np.random.default_rng(1)
    line = "  X  "
    for _ in range(100):
        out = apply_effects(line, Effects(jitter=True), gen)
        assert out.index("X") in range(0, 5)
        assert abs(out.index("X") - 2) <= 2


def test_jitter_is_reproducible_with_seed():
    a = apply_effects(SAMPLE, Effects(jitter=True), np.random.default_rng(9))
    b = apply_effects(SAMPLE, Effects(jitter=True), np.random.default_rng(9))
    assert a == b


def test_jitter_runs_after_scanlines():
    gen = np.random.default_rng(2)
    out = apply_effects("abcd\nabcd", Effects(scanlines=True, jitter=True), gen).split("\n")
    assert set(out[1]) <= {".", " "}
    assert out[1].count(".") >= 2


def test_jitter_needs_rng():
    with pytest.raises(ValueError):
        apply_effects(SAMPLE, Effects(jitter=True))

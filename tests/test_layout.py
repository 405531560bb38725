from glyphgrid.layout import MIN_FIT, allowed_cols, fit_dims, terminal_size


def test_terminal_size_defaults_when_not_a_tty(capsys):
    # stdout is captured, so it is not a tty
    assert terminal_size() == (80, 24)


def test_allowed_cols():
    assert allowed_cols(100) == 99
    assert allowed_cols(10) == 20


def test_fit_dims_stays_inside_area():
    cols, rows = fit_dims(800, 600, 160, 60)
    assert MIN_FIT <= cols <= 158
    assert MIN_FIT <= rows <= 58


def test_fit_dims_keeps_aspect():
    # 2:1 image in cells twice as tall as wide: four columns per row
    assert fit_dims(1000, 500, 121, 200) == (119, 30)


def test_fit_dims_floors_small_areas():
    cols, rows = fit_dims(100, 100, 10, 5)
    assert cols >= MIN_FIT
    assert rows >= MIN_FIT


class FakeStream:
    def __init__(self, tty):
        self.tty = tty

    def isatty(self):
        return self.tty

    def fileno(self):
        raise OSError("no descriptor")


def test_terminal_size_uses_fallback_for_pipes():
    assert terminal_size(FakeStream(False), fallback=(100, 40)) == (100, 40)


def test_terminal_size_detached_tty_falls_back():
    assert terminal_size(FakeStream(True)) == (80, 24)

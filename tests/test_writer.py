from datetime import datetime

import matplotlib.pyplot as plt
import pytest

from geckoutils.core.config import FigureSaveConfig
from geckoutils.core.errors import NoPlotAvailableError, UnsupportedFormatError
from geckoutils.visualization.writer import FigureWriter, save_plot_with_metadata


def make_writer(tmp_path, **config):
    cfg = FigureSaveConfig(save_dir=str(tmp_path), **config)
    return FigureWriter(config=cfg, clock=lambda: datetime(2024, 3, 5, 9, 0),
                        script_path_fn=lambda: "/work/report.py")


def test_config_supplies_defaults(tmp_path, scatter_figure):
    writer = make_writer(tmp_path, file_type="pdf")
    path = writer.save("scatter", scatter_figure)
    assert path == tmp_path.resolve() / "report_scatter_240305.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_explicit_arguments_win(tmp_path, scatter_figure):
    writer = make_writer(tmp_path, file_type="pdf", timestamp_format="%Y")
    path = writer.save("scatter", scatter_figure, save_dir=tmp_path / "explicit",
                       file_type="svg", prefix="fig", timestamp_format="%m%d")
    assert path == (tmp_path / "explicit").resolve() / "fig_scatter_0305.svg"
    assert path.exists()


def test_built_in_defaults():
    writer = FigureWriter()
    assert writer.config.file_type == "png"
    assert writer.config.timestamp_format == "%y%m%d"
    assert writer.config.dpi == 300


def test_preserve_latest_round_trip(tmp_path, scatter_figure):
    writer = make_writer(tmp_path)
    first = writer.save("scatter", scatter_figure, preserve_latest=True)
    original = first.read_bytes()
    second = writer.save("scatter", scatter_figure, preserve_latest=True, dpi=50)
    assert second == tmp_path.resolve() / "latest" / "report_scatter.png"
    assert (tmp_path / "archive" / "report_scatter_240305.png").read_bytes() == original

    # same bucket again: the archived copy stays untouched
    writer.save("scatter", scatter_figure, preserve_latest=True, dpi=40)
    assert (tmp_path / "archive" / "report_scatter_240305.png").read_bytes() == original
    assert sorted(p.name for p in (tmp_path / "archive").iterdir()) == ["report_scatter_240305.png"]


def test_use_device_captures_active_figure(tmp_path, scatter_figure):
    writer = make_writer(tmp_path)
    path = writer.save("active", use_device=True, width=2, height=1, dpi=100)
    assert plt.imread(path).shape[:2] == (100, 200)


def test_bad_format_touches_nothing(tmp_path, scatter_figure):
    writer = make_writer(tmp_path)
    with pytest.raises(UnsupportedFormatError):
        writer.save("scatter", scatter_figure, save_dir=tmp_path / "out", file_type="docx")
    assert not (tmp_path / "out").exists()


def test_missing_figure_keeps_latest(tmp_path, scatter_figure):
    writer = make_writer(tmp_path)
    latest = writer.save("scatter", scatter_figure, preserve_latest=True)
    with pytest.raises(NoPlotAvailableError):
        writer.save("scatter", preserve_latest=True)
    assert latest.exists()
    assert not any((tmp_path / "archive").iterdir())


def test_save_plot_with_metadata(tmp_path, scatter_figure):
    path = save_plot_with_metadata("scatter", scatter_figure, save_dir=tmp_path, prefix=False,
                                   timestamp_format="fixed")
    assert path == tmp_path.resolve() / "scatter_fixed.png"
    assert path.exists()


def test_script_path_sets_prefix(tmp_path, scatter_figure):
    writer = FigureWriter(config=FigureSaveConfig(save_dir=str(tmp_path)),
                          clock=lambda: datetime(2024, 3, 5),
                          script_path_fn=lambda: "/x/02_model.py")
    assert writer.save("fit", scatter_figure).name == "02_model_fit_240305.png"

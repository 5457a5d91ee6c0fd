"""Tests for the electron-beam command line."""

import numpy as np
import pytest
from PIL import Image

from electronbeam import cli


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "input.png"
    rgb = np.zeros((30, 40, 3), dtype=np.uint8)
    rgb[:, :, 0] = np.arange(40, dtype=np.uint8)[None, :] * 6
    rgb[:, :, 2] = 200
    Image.fromarray(rgb).save(path)
    return path


def _parse(*argv):
    return cli.build_parser().parse_args(list(argv))


class TestParser:
    def test_defaults(self):
        args = _parse("-i", "in.png", "-o", "out.gif")
        assert args.mode == "cool-down"
        assert args.frames == 30
        assert args.duration == 100
        assert args.v_stretch == 0.5
        assert args.h_stretch == 0.5
        assert args.workers == 1
        assert not args.reverse
        assert not args.loop
        assert args.width is None and args.height is None

    def test_unknown_mode_rejected(self):
        with pytest.raises(SystemExit):
            _parse("-i", "in.png", "-o", "out.gif", "-m", "sideways")


class TestProgressBar:
    def test_reports_frame_level(self, capsys):
        report = cli._progress_bar([0.0, 0.5, 1.0])
        for i in range(1, 4):
            report(i, 3)

        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[-1] == "100.0%  frame 3/3  level 1.000"
        assert "frame 2/3  level 0.500" in lines[1]

    def test_reverse_levels(self, capsys):
        report = cli._progress_bar([1.0, 0.0])
        report(1, 2)
        assert "level 1.000" in capsys.readouterr().out


class TestValidateArguments:
    def test_valid(self, input_png, tmp_path):
        args = _parse("-i", str(input_png), "-o", str(tmp_path / "out.gif"))
        assert cli.validate_arguments(args) == []

    def test_collects_every_problem(self, tmp_path):
        args = _parse(
            "-i", str(tmp_path / "missing.png"),
            "-o", str(tmp_path / "out.webm"),
            "-f", "0",
            "-d", "0",
            "--v-stretch", "1.5",
            "--h-stretch", "-0.2",
            "--width", "0",
            "-j", "0",
        )
        errors = cli.validate_arguments(args)
        assert len(errors) == 8
        assert any("does not exist" in e for e in errors)
        assert any("Unsupported output format" in e for e in errors)


class TestResolveDimensions:
    def test_image_size_by_default(self):
        assert cli.resolve_dimensions(40, 30) == (40, 30)

    def test_both_sides(self):
        assert cli.resolve_dimensions(40, 30, 100, 10) == (100, 10)

    def test_width_keeps_aspect(self):
        assert cli.resolve_dimensions(400, 300, width=200) == (200, 150)

    def test_height_keeps_aspect(self):
        assert cli.resolve_dimensions(400, 300, height=100) == (133, 100)

    def test_never_zero(self):
        assert cli.resolve_dimensions(1000, 1, width=10) == (10, 1)

    def test_profile(self):
        assert cli.resolve_dimensions(40, 30, profile="small") == (320, 240)

    def test_explicit_size_overrides_profile(self):
        assert cli.resolve_dimensions(400, 300, width=100, profile="large") == (100, 75)


class TestMain:
    def test_writes_gif(self, input_png, tmp_path, capsys):
        out = tmp_path / "anim.gif"
        cli.main(["-i", str(input_png), "-o", str(out), "-m", "fade", "-f", "4", "-l"])

        with Image.open(out) as img:
            assert img.size == (40, 30)
            assert img.n_frames == 4
            assert img.info["loop"] == 0
        assert "Done!" in capsys.readouterr().out

    def test_resized_threaded_render(self, input_png, tmp_path):
        out = tmp_path / "small.gif"
        cli.main([
            "-i", str(input_png), "-o", str(out),
            "--width", "20", "-f", "6", "-j", "3", "-r",
        ])
        with Image.open(out) as img:
            assert img.size == (20, 15)

    def test_creates_output_directory(self, input_png, tmp_path):
        out = tmp_path / "new" / "anim.gif"
        cli.main(["-i", str(input_png), "-o", str(out), "-f", "2", "-m", "fade"])
        assert out.exists()

    def test_invalid_arguments_exit_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["-i", str(tmp_path / "missing.png"), "-o", str(tmp_path / "out.gif")])
        assert exc_info.value.code == 1
        assert "Error: Input file does not exist" in capsys.readouterr().err

    def test_undecodable_input_exit_1(self, tmp_path, capsys):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"\x00\x01\x02")
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["-i", str(bad), "-o", str(tmp_path / "out.gif")])
        assert exc_info.value.code == 1
        assert "Failed to open image" in capsys.readouterr().err

"""Tests for the command-line driver."""

import pytest
from PIL import Image

import main


class TestMain:

    def test_renders_png(self, tmp_path, capsys):
        output = tmp_path / "nested" / "render.png"
        code = main.main([
            '--scene', 'bubble', '--width', '6', '--height', '4',
            '--samples', '1', '--depth', '2', '--threads', '2',
            '--seed', '5', '--output', str(output)
        ])

        assert code == 0
        with Image.open(output) as img:
            assert img.size == (6, 4)
        out = capsys.readouterr().out
        assert "Render took" in out
        assert "Done!" in out

    def test_width_from_aspect(self, tmp_path):
        output = tmp_path / "render.png"
        code = main.main([
            '--scene', 'bubble', '--height', '4', '--aspect', '2.0',
            '--samples', '1', '--depth', '1', '--threads', '1', '--output', str(output)
        ])
        assert code == 0
        with Image.open(output) as img:
            assert img.size == (8, 4)

    def test_invalid_configuration(self, tmp_path, capsys):
        code = main.main(['--height', '0', '--output', str(tmp_path / "x.png")])
        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path, capsys):
        code = main.main([
            '--scene', 'bubble', '--width', '2', '--height', '2', '--samples', '1',
            '--depth', '1', '--threads', '1', '--output', str(tmp_path / "render.unknownext")
        ])
        assert code == 2
        assert "Could not write image" in capsys.readouterr().err

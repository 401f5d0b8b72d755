"""Tests for the command-line interface."""

import json

from simelastic.cli import main

LEGACY_MODEL = """\
# two-patch block
ISOTROPIC 1
1 210e9 0.3 7850
GRAVITY 0 0 -9.81
PRESSURE 1
2 6 3 -1.0e6
"""


class TestCli:
    """Tests for the simelastic command."""

    def test_summary(self, tmp_path, capsys):
        path = tmp_path / "block.inp"
        path.write_text(LEGACY_MODEL)

        assert main(["summary", str(path), "--patches", "2"]) == 0

        info = json.loads(capsys.readouterr().out)
        assert info["num_materials"] == 1
        assert info["num_local_patches"] == 2
        assert info["properties"] == {"material": 1, "neumann": 1}
        assert info["traction_codes"] == [1]

    def test_summary_partition(self, tmp_path, capsys):
        path = tmp_path / "block.inp"
        path.write_text(LEGACY_MODEL)

        assert main(["summary", str(path), "--patches", "2", "--owned", "1"]) == 0

        info = json.loads(capsys.readouterr().out)
        assert info["num_local_patches"] == 1
        assert info["properties"] == {"material": 1}

    def test_summary_xml_2d(self, tmp_path, capsys):
        path = tmp_path / "plate.txt"
        path.write_text('<simulation><elasticity><isotropic code="1" E="1.0" nu="0.2"/></elasticity></simulation>')

        assert main(["summary", str(path), "--dim", "2", "--plane-strain", "--format", "xml"]) == 0
        assert json.loads(capsys.readouterr().out)["dimension"] == 2

    def test_parse_failure(self, tmp_path):
        path = tmp_path / "bad.inp"
        path.write_text("PRESSURE 1\n1 9 0 1.0\n")
        assert main(["summary", str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main(["summary", str(tmp_path / "missing.inp")]) == 2

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "model.inp"
        path.write_text("")
        assert main(["summary", str(path), "--plane-strain"]) == 2

    def test_config(self, capsys):
        assert main(["config"]) == 0
        assert "bodyforce_comp_3d" in capsys.readouterr().out

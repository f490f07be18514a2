"""Tests for the click command-line interface."""

import json

import pytest
from click.testing import CliRunner

from mappings.cli import cli
from mappings.output.report import REPORT_TYPE


@pytest.fixture
def runner():
    return CliRunner()


def test_parse_json(runner, sample_file):
    result = runner.invoke(cli, ["-q", "parse", str(sample_file), "--json"])

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["report_type"] == REPORT_TYPE
    assert report["stats"] == {"class_count": 2, "field_count": 4, "method_count": 5}
    assert report["classes"][0]["deobfuscated_name"] == "net/minecraft/world/level/Level"
    assert report["classes"][0]["fields"][0] == {
        "deobfuscated_name": "tickCount",
        "obfuscated_name": "a",
        "descriptor": "I",
    }


def test_parse_writes_report(runner, sample_file, tmp_path):
    output = tmp_path / "out" / "table.json"
    result = runner.invoke(cli, ["-q", "parse", str(sample_file), "-o", str(output)])

    assert result.exit_code == 0, result.output
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["source"] == str(sample_file)
    assert len(report["classes"]) == 2


def test_parse_malformed_file_exits_with_error(runner, tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("    int orphan -> a\n", encoding="utf-8")

    result = runner.invoke(cli, ["-q", "parse", str(bad), "--json"])

    assert result.exit_code == 1
    assert "report_type" not in result.output


def test_parse_missing_file_exits_with_error(runner, tmp_path):
    result = runner.invoke(cli, ["-q", "parse", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_lookup_class_and_member(runner, sample_file):
    ok = runner.invoke(
        cli,
        ["-q", "lookup", str(sample_file), "abc", "-m", "a", "-n", "obfuscated", "-d", "(Lbcd;)V"],
    )
    missing_class = runner.invoke(cli, ["-q", "lookup", str(sample_file), "nope"])
    missing_member = runner.invoke(
        cli, ["-q", "lookup", str(sample_file), "abc", "-m", "nope"]
    )

    assert ok.exit_code == 0, ok.output
    assert missing_class.exit_code == 1
    assert missing_member.exit_code == 1


def test_remap_plain(runner, sample_file):
    result = runner.invoke(
        cli,
        ["-q", "remap", str(sample_file), "(Lnet/minecraft/world/entity/Entity;I)V", "--plain"],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "(Lbcd;I)V"

    back = runner.invoke(
        cli, ["-q", "remap", str(sample_file), "(Lbcd;I)V", "--to", "deobfuscated", "-p"]
    )
    assert back.output.strip() == "(Lnet/minecraft/world/entity/Entity;I)V"


def test_encode(runner):
    method = runner.invoke(cli, ["-q", "encode", "void", "int", "foo.Bar"])
    field = runner.invoke(cli, ["-q", "encode", "--field", "int[][]"])
    bad = runner.invoke(cli, ["-q", "encode", "--field", "int", "long"])

    assert method.output.strip() == "(ILfoo/Bar;)V"
    assert field.output.strip() == "[[I"
    assert bad.exit_code == 2


def _write_config(tmp_path, mappings_section):
    path = tmp_path / "config.toml"
    path.write_text(
        "[global]\n"
        f'output_dir = "{(tmp_path / "reports").as_posix()}"\n'
        "\n"
        "[mappings]\n" + mappings_section,
        encoding="utf-8",
    )
    return path


def test_parse_json_format_from_config_writes_to_output_dir(runner, sample_file, tmp_path):
    config = _write_config(tmp_path, 'output_format = "json"\n')

    result = runner.invoke(cli, ["-q", "-c", str(config), "parse", str(sample_file)])

    assert result.exit_code == 0, result.output
    [report_path] = (tmp_path / "reports").glob("alloy_mappings_*.json")
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["stats"]["class_count"] == 2


def test_parse_format_option_overrides_config(runner, sample_file, tmp_path):
    config = _write_config(tmp_path, 'output_format = "json"\n')

    result = runner.invoke(
        cli, ["-q", "-c", str(config), "parse", str(sample_file), "--format", "console"]
    )

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "reports").exists()


def test_parse_console_format_writes_nothing_by_default(runner, sample_file, tmp_path):
    config = _write_config(tmp_path, 'output_format = "console"\n')

    result = runner.invoke(cli, ["-q", "-c", str(config), "parse", str(sample_file)])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "reports").exists()


def test_parse_rejects_unknown_configured_format(runner, sample_file, tmp_path):
    config = _write_config(tmp_path, 'output_format = "xml"\n')

    result = runner.invoke(cli, ["-q", "-c", str(config), "parse", str(sample_file)])

    assert result.exit_code == 2


def test_parse_warns_about_empty_table(runner, tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("# nothing mapped\n", encoding="utf-8")

    result = runner.invoke(cli, ["parse", str(empty)])

    assert result.exit_code == 0, result.output
    assert "No class mappings found" in result.output

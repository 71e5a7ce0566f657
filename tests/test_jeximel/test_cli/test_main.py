"""Tests for the CLI main module."""

import json

import pytest

from jeximel.cli.main import (
    create_argument_parser,
    describe_document,
    format_description,
    main,
)
from jeximel.api.parser import parse


@pytest.fixture
def xml_file(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_bytes(
        b'<?xml version="1.0" encoding="UTF-8"?>'
        b'<list owner="me"><item id="1">one</item><item id="2" flag="y"/></list>'
    )
    return path


class TestArgumentParser:
    """Test argument parsing."""

    def test_format_command(self):
        """Test format command options."""
        args = create_argument_parser().parse_args(
            ["format", "in.xml", "-o", "out.xml", "--attr-newline-all"]
        )

        assert args.command == "format"
        assert str(args.path) == "in.xml"
        assert str(args.output) == "out.xml"
        assert args.attr_newline_all
        assert not args.attr_newline_inline

    def test_inspect_command(self):
        """Test inspect command defaults."""
        args = create_argument_parser().parse_args(["inspect", "in.xml"])

        assert args.command == "inspect"
        assert args.format == "text"

    def test_inspect_invalid_format(self):
        """Test invalid output format."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["inspect", "in.xml", "--format", "csv"])


class TestFormatCommand:
    """Test the format command."""

    def test_format_to_stdout(self, xml_file, capsys):
        """Test re-emitting a document on stdout."""
        exit_code = main(["format", str(xml_file)])

        assert exit_code == 0
        assert capsys.readouterr().out == (
            '<?xml version="1.0" encoding="UTF-8" ?>\n'
            '<list owner="me">\n'
            '\t<item id="1">one</item>\n'
            '\t<item id="2" flag="y" />\n'
            '</list>\n'
        )

    def test_format_with_inline_option(self, xml_file, capsys):
        """Test the inline attribute option."""
        main(["format", str(xml_file), "--attr-newline-inline"])

        assert '\t<item\n\t\tid="2"\n\t\tflag="y"\n\t/>\n' in capsys.readouterr().out

    def test_format_to_file(self, xml_file, tmp_path):
        """Test writing the output to a file."""
        output = tmp_path / "out.xml"

        exit_code = main(["-q", "format", str(xml_file), "-o", str(output)])

        assert exit_code == 0
        assert parse(output.read_bytes()).get_child("list").get_attribute("owner") == "me"

    def test_format_with_config_file(self, xml_file, tmp_path, capsys):
        """Test options loaded from a configuration file."""
        config = tmp_path / "jeximel.json"
        config.write_text(json.dumps({"writer": {"options": ["ATTR_NEWLINE_ALL"]}}))

        main(["format", str(xml_file), "--config", str(config)])

        assert '<list\n\towner="me"\n>\n' in capsys.readouterr().out

    def test_format_parse_error(self, tmp_path, capsys):
        """Test parse failures are reported on stderr."""
        path = tmp_path / "bad.xml"
        path.write_text("</a>")

        exit_code = main(["format", str(path)])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test unreadable input."""
        exit_code = main(["format", str(tmp_path / "missing.xml")])

        assert exit_code == 1
        assert "Failed to read XML file" in capsys.readouterr().err

    def test_invalid_config_file(self, xml_file, tmp_path, capsys):
        """Test configuration errors are reported on stderr."""
        config = tmp_path / "jeximel.json"
        config.write_text("[]")

        exit_code = main(["format", str(xml_file), "--config", str(config)])

        assert exit_code == 1
        assert "JSON object" in capsys.readouterr().err


class TestInspectCommand:
    """Test the inspect command."""

    def test_inspect_text(self, xml_file, capsys):
        """Test the plain text report."""
        exit_code = main(["inspect", str(xml_file)])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "version: 1.0" in output
        assert "_ROOT -> list -> item" in output
        assert "   Attributes: id=2, flag=y" in output
        assert "   Text: one" in output

    def test_inspect_json(self, xml_file, capsys):
        """Test the JSON report."""
        main(["inspect", str(xml_file), "--format", "json"])

        report = json.loads(capsys.readouterr().out)
        assert report["declaration"] == {
            "version": "1.0",
            "encoding": "UTF-8",
            "standalone": True,
        }
        assert [e["ancestry"] for e in report["elements"]] == [
            "_ROOT -> list",
            "_ROOT -> list -> item",
            "_ROOT -> list -> item",
        ]
        assert report["elements"][0]["children"] == 2


class TestHelpers:
    """Test report helpers."""

    def test_describe_and_format(self):
        """Test a document without declaration."""
        description = describe_document(parse("<a/>"))

        text = format_description(description)

        assert description["declaration"]["version"] is None
        assert "version: -" in text
        assert "standalone: yes" in text
        assert text.endswith("_ROOT -> a")


def test_no_command(capsys):
    """Test running without a command prints help."""
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out

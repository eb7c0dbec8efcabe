"""Unit tests for command-line option handling and dispatch."""

from pathlib import Path

import pytest

from srtedit.cli import CommandOptions, apply_command, parse_options
from srtedit.formats.srt import parse_srt


def _options(command: str, **kwargs) -> CommandOptions:
    return CommandOptions(command=command, input_path=Path("in.srt"), **kwargs)


@pytest.mark.unit
class TestParseOptions:
    """Test cases for parse_options."""

    def test_trim_converts_time(self):
        """Test that TIME is converted to milliseconds."""
        options, log_level = parse_options(["trim", "in.srt", "0:00:40,000"])

        assert options.command == "trim"
        assert options.input_path == Path("in.srt")
        assert options.time_ms == 40000
        assert options.output_path is None
        assert log_level == "WARNING"

    def test_cut_converts_span(self):
        """Test that START and END are converted to milliseconds."""
        options, _ = parse_options(["cut", "in.srt", "0:00:30,000", "0:01:00,000"])

        assert options.start_ms == 30000
        assert options.end_ms == 60000

    def test_global_options(self):
        """Test output, encoding and log level flags."""
        options, log_level = parse_options(
            [
                "-o",
                "out.srt",
                "--encoding",
                "latin-1",
                "--log-level",
                "DEBUG",
                "sort",
                "in.srt",
            ]
        )

        assert options.output_path == Path("out.srt")
        assert options.encoding == "latin-1"
        assert log_level == "DEBUG"

    def test_defaults_come_from_settings(self, monkeypatch):
        """Test that configuration supplies option defaults."""
        monkeypatch.setenv("SRTEDIT_ENCODING", "cp1252")
        monkeypatch.setenv("SRTEDIT_LOG_LEVEL", "INFO")

        options, log_level = parse_options(["renumber", "in.srt"])

        assert options.encoding == "cp1252"
        assert log_level == "INFO"

    def test_delete_number(self):
        """Test that NUMBER is parsed as an integer."""
        options, _ = parse_options(["delete", "in.srt", "12"])

        assert options.number == 12

    def test_invalid_time_exits(self, capsys):
        """Test that a malformed TIME is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["trim", "in.srt", "40s"])

        assert exc_info.value.code == 2
        assert "Wrong timestamp format" in capsys.readouterr().err

    def test_missing_command_exits(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            parse_options([])


@pytest.mark.unit
class TestApplyCommand:
    """Test cases for apply_command."""

    def test_renumber(self, sample_srt_content):
        """Test that renumber reports the last number."""
        subtitle = parse_srt(sample_srt_content)

        assert apply_command(subtitle, _options("renumber")) == 3
        assert [entry.number for entry in subtitle] == [1, 2, 3]

    def test_trim_renumbers(self, timeline_srt_content):
        """Test that trimming is followed by renumbering."""
        subtitle = parse_srt(timeline_srt_content)

        deleted = apply_command(subtitle, _options("trim", time_ms=40000))

        assert deleted == 3
        assert [(entry.number, entry.start_ms) for entry in subtitle] == [
            (1, 10000),
            (2, 20000),
        ]

    def test_cut(self, timeline_srt_content):
        """Test removing an interior span."""
        subtitle = parse_srt(timeline_srt_content)

        deleted = apply_command(
            subtitle, _options("cut", start_ms=30000, end_ms=60000)
        )

        assert deleted == 2
        assert [entry.number for entry in subtitle] == [1, 2, 3]

    def test_delete_empty(self, sample_srt_content):
        """Test removing blank cues."""
        subtitle = parse_srt(sample_srt_content)

        assert apply_command(subtitle, _options("delete-empty")) == 2
        assert [entry.number for entry in subtitle] == [1]

    def test_delete_by_duration(self, timeline_srt_content):
        """Test removing cues at or under the threshold."""
        subtitle = parse_srt(timeline_srt_content)

        assert apply_command(subtitle, _options("delete-by-duration", time_ms=10000)) == 5
        assert len(subtitle) == 0

    def test_sort(self):
        """Test that sorting renumbers in time order."""
        subtitle = parse_srt(
            "1\n0:00:10,000 --> 0:00:11,000\nb\n\n2\n0:00:00,000 --> 0:00:01,000\na\n"
        )

        assert apply_command(subtitle, _options("sort")) == 2
        assert [entry.text for entry in subtitle] == ["a\n", "b\n"]
        assert [entry.number for entry in subtitle] == [1, 2]

    def test_delete(self, timeline_srt_content):
        """Test deleting one cue by number."""
        subtitle = parse_srt(timeline_srt_content)

        assert apply_command(subtitle, _options("delete", number=3)) == 1
        assert [entry.text for entry in subtitle] == [
            "one\n",
            "two\n",
            "four\n",
            "five\n",
        ]

    def test_delete_missing_number_raises_error(self, timeline_srt_content):
        """Test that a missing number is reported."""
        subtitle = parse_srt(timeline_srt_content)

        with pytest.raises(ValueError, match="Subtitle number 9 not found"):
            apply_command(subtitle, _options("delete", number=9))

    def test_unknown_command_raises_error(self, timeline_srt_content):
        """Test that unknown commands are rejected."""
        subtitle = parse_srt(timeline_srt_content)

        with pytest.raises(ValueError, match="Unknown command: shuffle"):
            apply_command(subtitle, _options("shuffle"))

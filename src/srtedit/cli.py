"""Command-line subtitle editor."""

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from srtedit.core.subtitle import Subtitle
from srtedit.core.timecode import FormatError, parse_timestamp
from srtedit.formats.srt import load_srt, serialize_srt
from srtedit.utils.config import get_settings
from srtedit.utils.logging import setup_logging

logger = structlog.get_logger()


@dataclass
class CommandOptions:
    """Arguments of one editor invocation.

    Attributes:
        command: Subcommand name, e.g. "trim"
        input_path: Subtitle file to edit
        output_path: Destination file, or None for stdout
        encoding: Text encoding of input and output files
        time_ms: Cutoff for trim, threshold for delete-by-duration
        start_ms: Start of the span removed by cut
        end_ms: End of the span removed by cut
        number: Subtitle number removed by delete
    """

    command: str
    input_path: Path
    output_path: Path | None = None
    encoding: str = "utf-8"
    time_ms: int = 0
    start_ms: int = 0
    end_ms: int = 0
    number: int = 0


def apply_command(subtitle: Subtitle, options: CommandOptions) -> int:
    """Run the editing operation named by options, then renumber.

    Args:
        subtitle: Parsed subtitle collection, edited in place
        options: Invocation options

    Returns:
        Count reported by the operation (deleted entries, or the last
        number for renumber and sort)

    Raises:
        ValueError: If the command is unknown, the span is invalid or the
            number to delete does not exist
    """
    command = options.command
    if command == "renumber":
        return subtitle.renumber()
    if command == "trim":
        result = subtitle.trim_to(options.time_ms)
    elif command == "cut":
        result = subtitle.cut(options.start_ms, options.end_ms)
    elif command == "delete-empty":
        result = subtitle.delete_empty()
    elif command == "delete-by-duration":
        result = subtitle.delete_by_duration(options.time_ms)
    elif command == "sort":
        subtitle.sort()
        return subtitle.renumber()
    elif command == "delete":
        position = subtitle.delete_by_number(options.number)
        if position is None:
            raise ValueError(f"Subtitle number {options.number} not found")
        result = 1
    else:
        raise ValueError(f"Unknown command: {command}")

    subtitle.renumber()
    return result


def _timestamp(value: str) -> int:
    try:
        return parse_timestamp(value)
    except FormatError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="srtedit",
        description="Edit SubRip (.srt) subtitle files.",
    )
    parser.add_argument(
        "-o", "--output", type=Path, help="write result to file instead of stdout"
    )
    parser.add_argument("--encoding", default=settings.encoding)
    parser.add_argument("--log-level", default=settings.log_level)

    commands = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command = commands.add_parser(name, help=help_text)
        command.add_argument("input_path", type=Path, metavar="FILE")
        return command

    add_command("dump", "print the file unchanged")
    add_command("renumber", "number subtitles from 1")
    add_command("trim", "drop everything before TIME").add_argument(
        "time_ms", type=_timestamp, metavar="TIME"
    )
    cut = add_command("cut", "remove the span between START and END")
    cut.add_argument("start_ms", type=_timestamp, metavar="START")
    cut.add_argument("end_ms", type=_timestamp, metavar="END")
    add_command("delete-empty", "remove subtitles without text")
    add_command(
        "delete-by-duration", "remove subtitles shown for TIME or less"
    ).add_argument("time_ms", type=_timestamp, metavar="TIME")
    add_command("sort", "order subtitles by start time")
    add_command("delete", "remove the subtitle numbered NUMBER").add_argument(
        "number", type=int
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> tuple[CommandOptions, str]:
    """Parse command-line arguments into options and a log level."""
    args = build_parser().parse_args(argv)
    fields = {
        name: getattr(args, name)
        for name in ("time_ms", "start_ms", "end_ms", "number")
        if hasattr(args, name)
    }
    options = CommandOptions(
        command=args.command,
        input_path=args.input_path,
        output_path=args.output,
        encoding=args.encoding,
        **fields,
    )
    return options, args.log_level


def run(options: CommandOptions) -> str:
    """Load the input file, apply the command and return the output text.

    Raises:
        ValueError: If the input path is not a file, or the command fails
        SRTParseError: If the input is malformed
    """
    if options.command == "dump":
        return options.input_path.read_text(encoding=options.encoding)

    subtitle = load_srt(options.input_path, options.encoding)
    result = apply_command(subtitle, options)
    logger.info(
        "command_applied",
        command=options.command,
        result=result,
        remaining=len(subtitle),
    )
    return serialize_srt(subtitle)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the srtedit console script."""
    options, log_level = parse_options(argv)
    try:
        setup_logging(log_level)
        output = run(options)
        if options.output_path is None:
            sys.stdout.write(output)
        else:
            options.output_path.write_text(output, encoding=options.encoding)
    except (FormatError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

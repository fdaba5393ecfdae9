"""logpretty — render JSON log lines from stdin as aligned, colorized text."""

import logging
import os
import sys
from argparse import ArgumentParser

from logpretty.colors import ColorMode, build_palette, resolve_color_mode
from logpretty.config import Config, load_config, load_palette_overrides
from logpretty.formatter import BAD_TIMESTAMP_POLICIES, LineRenderer
from logpretty.reader import read_lines, write_line

logger = logging.getLogger(__name__)


def build_parser(config: Config) -> ArgumentParser:
    """Build the CLI argument parser; environment config supplies the defaults."""
    parser = ArgumentParser(
        prog="logpretty",
        description="Render structured JSON log lines from stdin as human-readable text.",
    )
    parser.add_argument(
        "-c", "--concise",
        action="store_true",
        default=config.concise,
        help="Omit fields other than ts, level, component, subcomponent and msg",
    )
    parser.add_argument(
        "--color",
        choices=[m.value for m in ColorMode],
        default=config.color,
        help="Configure color mode (default: auto, colors only when stdout is a TTY)",
    )
    parser.add_argument(
        "--on-bad-timestamp",
        choices=BAD_TIMESTAMP_POLICIES,
        default=config.on_bad_timestamp,
        help="Stop with an error, or echo the raw line, when ts isn't RFC 3339 (default: abort)",
    )
    parser.add_argument(
        "--palette",
        default=config.palette_path,
        help="YAML file overriding the critical/error/warning/info/key colors",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log diagnostics at DEBUG level to stderr",
    )
    return parser


def run(args) -> None:
    """Resolve colors once, then render stdin to stdout line by line."""
    mode = ColorMode.parse(args.color)
    enabled = resolve_color_mode(mode, sys.stdout)
    logger.debug("Color mode %s resolved to %s", mode.value, enabled)

    palette = build_palette(enabled, load_palette_overrides(args.palette))
    renderer = LineRenderer(palette, concise=args.concise, on_bad_timestamp=args.on_bad_timestamp)

    out = sys.stdout.buffer
    for line in read_lines(sys.stdin.buffer):
        write_line(out, renderer.render(line))


def _discard_stdout() -> None:
    # Keep the interpreter's final flush from failing on the closed pipe
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv=None) -> int:
    args = build_parser(load_config()).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    try:
        run(args)
    except BrokenPipeError:
        # Downstream stopped reading (e.g. piped into head); not an error
        _discard_stdout()
        return 0
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as e:
        print(f"Error! {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

import sys
import logging
import argparse
import platform

from . import __version__
from .decoder import SWDLogDecoder
from .report import Reporter
from .database import devices


# When running as `-m swdlog.cli`, `__name__` is `__main__`, and the real name
# can be retrieved from `__loader__.name`.
logger = logging.getLogger(__loader__.name)


def version_info():
    python_version = ".".join(map(str, sys.version_info[:3]))
    python_implementation = platform.python_implementation()
    return f"swdlog {__version__} ({python_implementation} {python_version})"


def create_argparser():
    parser = argparse.ArgumentParser(
        description="Decode WaveForms SWD protocol logs into ARM debug register accesses.")

    parser.add_argument(
        "-V", "--version", action="version", version=version_info(),
        help="show version and exit")
    parser.add_argument(
        "-v", "--verbose", default=0, action="count",
        help="increase logging verbosity")
    parser.add_argument(
        "-q", "--quiet", default=0, action="count",
        help="decrease logging verbosity")
    parser.add_argument(
        "-L", "--log-file", metavar="FILE", type=argparse.FileType("w"),
        help="save log messages at highest verbosity to FILE")
    parser.add_argument(
        "--color", choices=("auto", "always", "never"), default="auto",
        help="colorize decoded output (default: %(default)s)")
    parser.add_argument(
        "-d", "--device", choices=sorted(devices), default="nrf52",
        help="device profile used to label access ports (default: %(default)s); "
             + "; ".join(f"{name}: {device.description}"
                         for name, device in sorted(devices.items())))
    parser.add_argument(
        "input", metavar="INPUT",
        help="read WaveForms SWD log from INPUT")

    return parser


class TerminalFormatter(logging.Formatter):
    DEFAULT_COLORS = {
        "TRACE"   : "\033[0m",
        "DEBUG"   : "\033[36m",
        "INFO"    : "\033[1m",
        "WARNING" : "\033[1;33m",
        "ERROR"   : "\033[1;31m",
        "CRITICAL": "\033[1;41m",
    }

    def format(self, record):
        color = self.DEFAULT_COLORS.get(record.levelname, "")
        # swdlog.decoder → s.decoder
        record.name = record.name.replace("swdlog.", "s.")
        return f"{color}{super().format(record)}\033[0m"


def create_logger():
    root_logger = logging.getLogger()

    term_formatter_args = {"style": "{",
        "fmt": "{levelname[0]:s}: {name:s}: {message:s}"}
    term_handler = logging.StreamHandler()
    if sys.stderr.isatty() and sys.platform != 'win32':
        term_handler.setFormatter(TerminalFormatter(**term_formatter_args))
    else:
        term_handler.setFormatter(logging.Formatter(**term_formatter_args))
    root_logger.addHandler(term_handler)
    return term_handler


def configure_logger(args, term_handler):
    root_logger = logging.getLogger()

    level = logging.INFO + args.quiet * 10 - args.verbose * 10
    file_handler = None
    if args.log_file:
        file_formatter_args = {"style": "{",
            "fmt": "[{asctime:s}] {levelname:s}: {name:s}: {message:s}"}
        file_handler = logging.StreamHandler(args.log_file)
        file_handler.setFormatter(logging.Formatter(**file_formatter_args))
        root_logger.addHandler(file_handler)
        term_handler.setLevel(max(level, logging.TRACE))
        root_logger.setLevel(logging.TRACE)
    else:
        root_logger.setLevel(max(level, logging.TRACE))
    return file_handler


def use_color(args, stream):
    if args.color == "always":
        return True
    if args.color == "never":
        return False
    return stream.isatty() and sys.platform != 'win32'


def main(argv=None):
    args = create_argparser().parse_args(argv)
    term_handler = create_logger()
    file_handler = configure_logger(args, term_handler)

    device   = devices[args.device]
    decoder  = SWDLogDecoder(device)
    reporter = Reporter(sys.stdout, color=use_color(args, sys.stdout), device=device)
    logger.debug("decoding %s as %s", args.input, device.description)

    try:
        with open(args.input, encoding="utf-8", errors="replace") as f:
            for result in decoder.decode_lines(f):
                reporter.report(result)
        reporter.summary()

    # Input-related errors
    except OSError as e:
        logger.error("cannot read %s: %s", args.input, e.strerror or e)
        return 1

    # User interruption
    except KeyboardInterrupt:
        logger.warning("interrupted")
        return 130 # 128 + SIGINT

    finally:
        for handler in (term_handler, file_handler):
            if handler is not None:
                logging.getLogger().removeHandler(handler)

    return 0


# This entry point is invoked via `console_scripts` when installing the package.
def run_main():
    exit(main())


# This entry point is invoked when running `python -m swdlog.cli`.
if __name__ == "__main__":
    run_main()

import io
import os
import errno
import logging
import tempfile
import unittest
from unittest import mock
from contextlib import redirect_stdout

from swdlog.cli import main, create_argparser


CAPTURE = """\
Sheet1
DP RD A:0 ACK:1 OK Data:h2BA01477
DP WR A:2 ACK:1 OK Data:h01000000
AP WR A:1 ACK:1 OK Data:h00000001
AP RD A:2 ACK:1 OK Data:h00000000
"""


class FailingFile(io.StringIO):
    def __init__(self, text, lines_before_error):
        super().__init__(text)
        self.lines_before_error = lines_before_error

    def __next__(self):
        if self.lines_before_error == 0:
            raise OSError(errno.EIO, os.strerror(errno.EIO))
        self.lines_before_error -= 1
        return super().__next__()


class CLITestCase(unittest.TestCase):
    def setUp(self):
        self.root_level = logging.getLogger().level
        self.tempdir = tempfile.TemporaryDirectory()
        self.input = os.path.join(self.tempdir.name, "capture.csv")
        with open(self.input, "w") as f:
            f.write(CAPTURE)

    def tearDown(self):
        logging.getLogger().setLevel(self.root_level)
        self.tempdir.cleanup()

    def run_main(self, *argv):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = main(list(argv))
        return code, stdout.getvalue()

    def test_argparser(self):
        args = create_argparser().parse_args(["capture.csv"])
        self.assertEqual(args.input, "capture.csv")
        self.assertEqual(args.device, "nrf52")
        self.assertEqual(args.color, "auto")
        self.assertEqual(args.verbose, 0)
        self.assertEqual(args.quiet, 0)

    def test_decode(self):
        code, output = self.run_main("--color", "never", self.input)
        self.assertEqual(code, 0)
        self.assertEqual(output.splitlines(), [
            "Sheet1",
            "DP RD A:0 ACK:1 OK Data:h2BA01477  <-- R:00 IDCODE    "
            "DESIGNER:23B PARTNO:BA01 VERSION:2",
            "DP WR A:2 ACK:1 OK Data:h01000000  --> R:08 SELECT    "
            "CTRLSEL:0 APBANKSEL:0 APSEL:01 [CTRL-AP]",
            "AP WR A:1 ACK:1 OK Data:h00000001  --> R:04 ERASEALL  ERASEALL:1",
            "AP RD A:2 ACK:1 OK Data:h00000000  <-- R:08 ERASEALLSTATUS BUSY:0",
            "",
            "Access ports:",
            "  APSEL 0x01 CTRL-AP",
        ])

    def test_decode_generic(self):
        code, output = self.run_main("--color", "never", "--device", "generic", self.input)
        self.assertEqual(code, 0)
        lines = output.splitlines()
        self.assertEqual(lines[3], "AP WR A:1 ACK:1 OK Data:h00000001  --> R:04 TAR      "
                                   " ADDR:00000001")
        self.assertEqual(lines[4], "AP RD A:2 ACK:1 OK Data:h00000000  <-- R:08 "
                                   "?? unrecognized register")
        self.assertEqual(lines[-1], "  APSEL 0x01")

    def test_missing_file(self):
        missing = os.path.join(self.tempdir.name, "missing.csv")
        with self.assertLogs("swdlog.cli", "ERROR") as logs:
            code, output = self.run_main("--color", "never", missing)
        self.assertEqual(code, 1)
        self.assertEqual(output, "")
        self.assertIn("cannot read", logs.output[0])
        self.assertIn("missing.csv", logs.output[0])

    def test_handlers_removed(self):
        handlers = list(logging.getLogger().handlers)
        self.run_main("--color", "never", self.input)
        self.assertEqual(logging.getLogger().handlers, handlers)

    def test_version(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_main("--version")
        self.assertEqual(cm.exception.code, 0)

    def test_bad_device(self):
        with redirect_stdout(io.StringIO()), \
                mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main(["--device", "stm32", self.input])
        self.assertEqual(cm.exception.code, 2)

    def test_read_error(self):
        with mock.patch("swdlog.cli.open", create=True,
                        return_value=FailingFile(CAPTURE, 2)):
            with self.assertLogs("swdlog.cli", "ERROR") as logs:
                code, output = self.run_main("--color", "never", self.input)
        self.assertEqual(code, 1)
        self.assertEqual(output.splitlines(), [
            "Sheet1",
            "DP RD A:0 ACK:1 OK Data:h2BA01477  <-- R:00 IDCODE    "
            "DESIGNER:23B PARTNO:BA01 VERSION:2",
        ])
        self.assertNotIn("Access ports", output)
        self.assertEqual(logs.output, [
            f"ERROR:swdlog.cli:cannot read {self.input}: {os.strerror(errno.EIO)}"
        ])

    def test_device_description(self):
        with self.assertLogs("swdlog.cli", "DEBUG") as logs:
            self.run_main("--color", "never", "-v", self.input)
        self.assertIn(f"decoding {self.input} as Nordic Semiconductor nRF52 series",
                      logs.output[0])

    def test_device_help(self):
        help = create_argparser().format_help()
        self.assertIn("nrf52: Nordic Semiconductor nRF52 series", " ".join(help.split()))

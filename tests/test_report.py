import io
import os
import unittest
from unittest import mock

from swdlog.decoder import SWDLogDecoder
from swdlog.database import devices
from swdlog.report import Reporter


class ReporterTestCase(unittest.TestCase):
    def setUp(self):
        self.stream = io.StringIO()
        with mock.patch.dict(os.environ, {"SWDLOG_COLORS": ""}):
            self.reporter = Reporter(self.stream)
        self.decoder = SWDLogDecoder()

    def use_device(self, name):
        self.reporter.device = devices[name]
        self.decoder = SWDLogDecoder(devices[name])

    def assertFormats(self, line, expected):
        self.assertEqual(self.reporter.format(self.decoder.decode_line(line)), expected)

    def test_passthrough(self):
        self.assertFormats("Sheet1", "Sheet1")
        self.assertFormats("", "")
        self.assertFormats("DP RD A:0 ACK:4 FAULT", "DP RD A:0 ACK:4 FAULT")

    def test_read(self):
        self.assertFormats(
            "DP RD A:0 ACK:1 OK Data:h2BA01477",
            "DP RD A:0 ACK:1 OK Data:h2BA01477  <-- R:00 IDCODE    "
            "DESIGNER:23B PARTNO:BA01 VERSION:2")

    def test_write(self):
        self.assertFormats(
            "DP WR A:1 ACK:1 OK Data:h50000000",
            "DP WR A:1 ACK:1 OK Data:h50000000  --> R:04 CTRL/STAT "
            "ORUNDETECT:0 STICKYORUN:0 TRNMODE:0 STICKYCMP:0 STICKYERR:0 READOK:0 "
            "WDATAERR:0 MASKLANE:0 TRNCNT:0 CDBGRSTREQ:0 CDBGRSTACK:0 CDBGPWRUPREQ:1 "
            "CDBGPWRUPACK:0 CSYSPWRUPREQ:1 CSYSPWRUPACK:0")

    def test_select_label(self):
        self.use_device("nrf52")
        self.assertFormats(
            "DP WR A:2 ACK:1 OK Data:h01000000",
            "DP WR A:2 ACK:1 OK Data:h01000000  --> R:08 SELECT    "
            "CTRLSEL:0 APBANKSEL:0 APSEL:01 [CTRL-AP]")

    def test_memory(self):
        self.decoder.decode_line("AP WR A:1 ACK:1 OK Data:hE000EDF0")
        self.assertFormats(
            "AP WR A:3 ACK:1 OK Data:hA05F0003",
            "AP WR A:3 ACK:1 OK Data:hA05F0003  --> R:0C @E000EDF0 DHCSR     "
            "C_DEBUGEN:1 C_HALT:1 C_STEP:0 C_MASKINTS:0 C_SNAPSTALL:0 DBGKEY:A05F")

    def test_unknown(self):
        self.assertFormats(
            "AP RD A:2 ACK:1 OK Data:h00000000",
            "AP RD A:2 ACK:1 OK Data:h00000000  <-- R:08 ?? unrecognized register")

    def test_report(self):
        for line in ["Sheet1", "DP RD A:3 ACK:1 OK Data:h00000000"]:
            self.reporter.report(self.decoder.decode_line(line))
        self.assertEqual(self.stream.getvalue(),
            "Sheet1\n"
            "DP RD A:3 ACK:1 OK Data:h00000000  <-- R:0C RDBUFF    DATA:00000000\n")

    def test_summary_empty(self):
        self.reporter.report(self.decoder.decode_line("DP RD A:0 ACK:1 OK Data:h2BA01477"))
        self.stream.truncate(0)
        self.stream.seek(0)
        self.reporter.summary()
        self.assertEqual(self.stream.getvalue(), "\nAccess ports: none selected\n")

    def test_summary(self):
        self.use_device("nrf52")
        for line in [
            "DP WR A:2 ACK:1 OK Data:h02000000",
            "DP WR A:2 ACK:1 OK Data:h01000000",
            "DP WR A:2 ACK:1 OK Data:h000000F0",
            "DP WR A:2 ACK:1 OK Data:h01000000",
        ]:
            self.reporter.report(self.decoder.decode_line(line))
        self.assertEqual(self.reporter.apsels, {0x00, 0x01, 0x02})
        self.stream.truncate(0)
        self.stream.seek(0)
        self.reporter.summary()
        self.assertEqual(self.stream.getvalue(),
            "\n"
            "Access ports:\n"
            "  APSEL 0x00 AHB-AP\n"
            "  APSEL 0x01 CTRL-AP\n"
            "  APSEL 0x02\n")

    def test_summary_ignores_reads(self):
        self.reporter.report(self.decoder.decode_line("DP RD A:2 ACK:1 OK Data:h01000000"))
        self.assertEqual(self.reporter.apsels, set())


class ReporterColorTestCase(unittest.TestCase):
    def format(self, reporter, line):
        return reporter.format(SWDLogDecoder().decode_line(line))

    def test_no_color(self):
        with mock.patch.dict(os.environ, {"SWDLOG_COLORS": ""}):
            reporter = Reporter(io.StringIO(), color=False)
        self.assertNotIn("\033", self.format(reporter, "DP RD A:3 ACK:1 OK Data:h00000000"))

    def test_default_colors(self):
        with mock.patch.dict(os.environ, {"SWDLOG_COLORS": ""}):
            reporter = Reporter(io.StringIO(), color=True)
        self.assertEqual(
            self.format(reporter, "DP RD A:3 ACK:1 OK Data:h00000000"),
            "DP RD A:3 ACK:1 OK Data:h00000000  \033[32m<--\033[0m R:0C "
            "\033[1mRDBUFF   \033[0m DATA:00000000")
        self.assertEqual(
            self.format(reporter, "AP RD A:2 ACK:1 OK Data:h00000000"),
            "AP RD A:2 ACK:1 OK Data:h00000000  \033[32m<--\033[0m R:08 "
            "\033[1;31m?? unrecognized register\033[0m")

    def test_color_override(self):
        with mock.patch.dict(os.environ, {"SWDLOG_COLORS": "write=1;34:register=4"}):
            reporter = Reporter(io.StringIO(), color=True)
        self.assertEqual(reporter.colors["write"], "\033[1;34m")
        self.assertEqual(reporter.colors["read"], "\033[32m")
        self.assertEqual(
            self.format(reporter, "DP WR A:3 ACK:1 OK Data:h00000000"),
            "DP WR A:3 ACK:1 OK Data:h00000000  \033[1;34m-->\033[0m R:0C "
            "\033[1;31m?? unrecognized register\033[0m")
        self.assertEqual(
            self.format(reporter, "DP WR A:0 ACK:1 OK Data:h00000001"),
            "DP WR A:0 ACK:1 OK Data:h00000001  \033[1;34m-->\033[0m R:00 "
            "\033[4mABORT    \033[0m DAPABORT:1 STKCMPCLR:0 STKERRCLR:0 WDERRCLR:0 "
            "ORUNERRCLR:0")

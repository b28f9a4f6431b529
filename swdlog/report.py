import os
import sys

from .protocol.swd_log import Direction
from .decoder import Decoded, UnknownRegister
from .profile import generic
from .arch.arm.dap.dp import DP_SELECT


__all__ = ["Reporter"]


class Reporter:
    """
    Renders decode results, one output line per input line, and collects the AP selector
    values written to SELECT for the end-of-stream summary.
    """
    DEFAULT_COLORS = {
        "read"    : "\033[32m",
        "write"   : "\033[33m",
        "register": "\033[1m",
        "memory"  : "\033[35m",
        "label"   : "\033[36m",
        "unknown" : "\033[1;31m",
    }

    def __init__(self, stream=None, color=False, device=generic):
        self.stream = sys.stdout if stream is None else stream
        self.color  = color
        self.device = device
        self.apsels = set()

        self.colors = dict(self.DEFAULT_COLORS)
        for color_override in os.getenv("SWDLOG_COLORS", "").split(":"):
            if color_override:
                kind, color = color_override.split("=", 1)
                self.colors[kind] = f"\033[{color}m"

    def _paint(self, kind, text):
        if not self.color:
            return text
        return f"{self.colors.get(kind, '')}{text}\033[0m"

    def format(self, result):
        if not isinstance(result, (Decoded, UnknownRegister)):
            return result.line

        if result.record.direction == Direction.READ:
            arrow = self._paint("read", "<--")
        else:
            arrow = self._paint("write", "-->")
        text = f"{result.line}  {arrow} R:{result.address:02X}"

        if isinstance(result, UnknownRegister):
            return f"{text} {self._paint('unknown', '?? unrecognized register')}"

        if result.memory_address is not None:
            text += " " + self._paint("memory", f"@{result.memory_address:08X}")
        text += f" {self._paint('register', f'{result.register.name:<9}')}"
        fields = result.value.fields_repr()
        if fields:
            text += f" {fields}"
        if result.ap_label is not None:
            text += " " + self._paint("label", f"[{result.ap_label}]")
        return text

    def report(self, result):
        if isinstance(result, Decoded) and isinstance(result.value, DP_SELECT):
            self.apsels.add(result.value.APSEL)
        print(self.format(result), file=self.stream)

    def summary(self):
        print(file=self.stream)
        if not self.apsels:
            print("Access ports: none selected", file=self.stream)
            return
        print("Access ports:", file=self.stream)
        for apsel in sorted(self.apsels):
            label = self.device.label(apsel)
            if label is None:
                print(f"  APSEL 0x{apsel:02X}", file=self.stream)
            else:
                print(f"  APSEL 0x{apsel:02X} {self._paint('label', label)}", file=self.stream)

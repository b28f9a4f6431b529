import logging
from dataclasses import dataclass
from typing import Optional

from .protocol.swd_log import *
from .catalog import Space, RegisterDescriptor, MEMORY_WINDOWS, registers
from .context import DecodeContext
from .profile import generic
from .arch.arm.dap.dp import DP_SELECT_addr


__all__ = [
    "DecodeResult", "NotATransaction", "Decoded", "UnknownRegister",
    "decode_transaction", "SWDLogDecoder",
]


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    line: str


@dataclass(frozen=True)
class NotATransaction(DecodeResult):
    """The line is not a transaction line and passes through unchanged."""


@dataclass(frozen=True)
class Decoded(DecodeResult):
    record:   TransactionRecord
    address:  int
    register: RegisterDescriptor
    value:    object
    # Absolute address, if the register was reached through TAR.
    memory_address: Optional[int] = None
    # Label of the newly selected AP, for SELECT writes.
    ap_label: Optional[str] = None


@dataclass(frozen=True)
class UnknownRegister(DecodeResult):
    record:  TransactionRecord
    address: int


def _resolve(record, context, device):
    address = context.bank_address(record)
    if record.access == Access.DP:
        return address, None, registers.lookup(Space.DP, address, record.direction, context)

    if device.is_mem_ap(context.apsel) and address in MEMORY_WINDOWS:
        descriptor = registers.lookup(Space.MEM, context.tar, record.direction, context)
        if descriptor is not None:
            return address, context.tar, descriptor

    catalog = device.catalog(context.apsel)
    return address, None, catalog.lookup(Space.AP, address, record.direction, context)


def decode_transaction(record, context, device=generic, line=""):
    """
    Decode a single transaction.

    The register is resolved with ``context`` as it was before the transaction. Returns
    the decode result and the context after the transaction; the context is advanced even if
    the register is not recognized.
    """
    address, memory_address, descriptor = _resolve(record, context, device)
    next_context = context.update(record)

    if descriptor is None:
        logger.debug("SWD: unrecognized %s %s at %#04x (apsel=%02x)",
                     record.access.value, record.direction.value, address, context.apsel)
        return UnknownRegister(line, record, address), next_context

    ap_label = None
    if (record.access == Access.DP and record.direction == Direction.WRITE and
            address == DP_SELECT_addr):
        ap_label = device.label(next_context.apsel)

    result = Decoded(line, record, address, descriptor, descriptor.decode(record.data),
                     memory_address=memory_address, ap_label=ap_label)
    return result, next_context


class SWDLogDecoder:
    """
    Decoder for a stream of WaveForms SWD log lines.

    The decode context lives for one stream; :meth:`reset` starts a new one. It is never reset
    implicitly.
    """
    def __init__(self, device=generic):
        self.device  = device
        self.context = DecodeContext()

    def reset(self):
        self.context = DecodeContext()

    def decode_record(self, record, line=""):
        result, self.context = decode_transaction(record, self.context, self.device, line)
        return result

    def decode_line(self, line):
        record = parse_line(line)
        if record is None:
            return NotATransaction(line)
        return self.decode_record(record, line)

    def decode_lines(self, lines):
        for line in lines:
            yield self.decode_line(line.rstrip("\r\n"))

import logging
import dataclasses
from dataclasses import dataclass
from typing_extensions import Self

from .protocol.swd_log import Access, Direction
from .arch.arm.dap.dp import DP_SELECT_addr, DP_SELECT
from .arch.arm.dap.ap import MEM_AP_TAR_addr


__all__ = ["DecodeContext", "dp_address", "ap_address", "update"]


logger = logging.getLogger(__name__)


def dp_address(address_2_3):
    return address_2_3 << 2


def ap_address(apbanksel, address_2_3):
    return (apbanksel << 4) | (address_2_3 << 2)


@dataclass(frozen=True)
class DecodeContext:
    """
    Protocol state needed to identify the register a transaction refers to: the fields of the
    last SELECT write and the value of the last TAR write.
    """
    ctrlsel:   bool = False
    apbanksel: int  = 0
    apsel:     int  = 0
    tar:       int  = 0

    def bank_address(self, record):
        """Bank address of ``record`` under the current bank selection."""
        if record.access == Access.DP:
            return dp_address(record.address_2_3)
        else:
            return ap_address(self.apbanksel, record.address_2_3)

    def update(self, record) -> Self:
        """
        Return the context as it is after ``record``.

        The bank address of a TAR write is computed with the bank selection in effect before
        the transaction; a single transaction never writes both SELECT and TAR.
        """
        if record.direction != Direction.WRITE:
            return self

        if record.access == Access.DP and record.address == DP_SELECT_addr:
            select = DP_SELECT.from_int(record.data)
            logger.trace("SWD: select apsel=%02x apbanksel=%x ctrlsel=%d",
                         select.APSEL, select.APBANKSEL, select.CTRLSEL)
            return dataclasses.replace(self,
                ctrlsel=bool(select.CTRLSEL),
                apbanksel=select.APBANKSEL,
                apsel=select.APSEL)

        if record.access == Access.AP and self.bank_address(record) == MEM_AP_TAR_addr:
            logger.trace("SWD: tar=%08x", record.data)
            return dataclasses.replace(self, tar=record.data)

        return self


def update(context, record):
    return context.update(record)

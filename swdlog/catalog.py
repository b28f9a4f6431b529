import enum
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

from .protocol.swd_log import Direction
from .arch.arm.dap.dp import *
from .arch.arm.dap.ap import *
from .arch.arm.v7m import *


__all__ = [
    "Space", "CatalogError", "RegisterDescriptor", "RegisterCatalog",
    "MEMORY_WINDOWS", "ap_idr", "registers",
]


class Space(enum.Enum):
    DP  = "DP"  # DP bank offset
    AP  = "AP"  # AP bank address, (APBANKSEL << 4) | (A[3:2] << 2)
    MEM = "MEM" # absolute address on the bus behind a MEM-AP


class CatalogError(TypeError):
    pass


@dataclass(frozen=True)
class RegisterDescriptor:
    """
    A register known to the decoder.

    Registers that share an address are told apart by their applicability conditions:
    ``direction`` restricts a register to reads or writes, and ``ctrlsel`` to a particular
    value of ``SELECT.CTRLSEL``. A condition of ``None`` always holds.
    """
    space:     Space
    name:      str
    address:   int
    layout:    type
    direction: Optional[Direction] = None
    ctrlsel:   Optional[bool] = None

    def applies(self, direction, context):
        if self.direction is not None and self.direction != direction:
            return False
        if self.ctrlsel is not None and self.ctrlsel != context.ctrlsel:
            return False
        return True

    def overlaps(self, other):
        """Whether some direction and context would make both ``self`` and ``other`` apply."""
        if (self.space, self.address) != (other.space, other.address):
            return False
        for condition in ("direction", "ctrlsel"):
            ours, theirs = getattr(self, condition), getattr(other, condition)
            if ours is not None and theirs is not None and ours != theirs:
                return False
        return True

    def decode(self, data):
        return self.layout.from_int(data)


class RegisterCatalog:
    """
    A table of register descriptors, queried by ``(space, address, direction, context)``.

    At most one descriptor can match any query; a catalog with overlapping descriptors is
    rejected with :class:`CatalogError` when it is built.
    """
    def __init__(self, descriptors):
        self._descriptors = defaultdict(list)
        for descriptor in descriptors:
            for other in self._descriptors[descriptor.space, descriptor.address]:
                if descriptor.overlaps(other):
                    raise CatalogError("register %s overlaps register %s at %s address %#x"
                                       % (descriptor.name, other.name,
                                          descriptor.space.value, descriptor.address))
            self._descriptors[descriptor.space, descriptor.address].append(descriptor)

    def __len__(self):
        return sum(map(len, self._descriptors.values()))

    def lookup(self, space, address, direction, context):
        for descriptor in self._descriptors.get((space, address), ()):
            if descriptor.applies(direction, context):
                return descriptor
        return None


# Bank addresses of a MEM-AP through which core debug registers are reached via TAR.
MEMORY_WINDOWS = (MEM_AP_DRW_addr, MEM_AP_BD_addr(0))


_DP, _AP, _MEM = Space.DP, Space.AP, Space.MEM
_RD, _WR = Direction.READ, Direction.WRITE

# Present in every AP, whatever its class.
ap_idr = RegisterDescriptor(_AP, "IDR", AP_IDR_addr, AP_IDR)

registers = RegisterCatalog([
    RegisterDescriptor(_DP,  "IDCODE",    DP_IDCODE_addr,    DP_IDCODE,    direction=_RD),
    RegisterDescriptor(_DP,  "ABORT",     DP_ABORT_addr,     DP_ABORT,     direction=_WR),
    RegisterDescriptor(_DP,  "CTRL/STAT", DP_CTRL_STAT_addr, DP_CTRL_STAT, ctrlsel=False),
    RegisterDescriptor(_DP,  "WCR",       DP_WCR_addr,       DP_WCR,       ctrlsel=True),
    RegisterDescriptor(_DP,  "SELECT",    DP_SELECT_addr,    DP_SELECT,    direction=_WR),
    RegisterDescriptor(_DP,  "RESEND",    DP_RESEND_addr,    DP_RESEND,    direction=_RD),
    RegisterDescriptor(_DP,  "RDBUFF",    DP_RDBUFF_addr,    DP_RDBUFF,    direction=_RD),

    RegisterDescriptor(_AP,  "CSW",       MEM_AP_CSW_addr,   MEM_AP_CSW),
    RegisterDescriptor(_AP,  "TAR",       MEM_AP_TAR_addr,   MEM_AP_TAR),
    RegisterDescriptor(_AP,  "DRW",       MEM_AP_DRW_addr,   MEM_AP_DRW),
    *(RegisterDescriptor(_AP, f"BD{index}", MEM_AP_BD_addr(index), MEM_AP_BD)
      for index in range(4)),
    RegisterDescriptor(_AP,  "CFG",       MEM_AP_CFG_addr,   MEM_AP_CFG,   direction=_RD),
    RegisterDescriptor(_AP,  "BASE",      MEM_AP_BASE_addr,  MEM_AP_BASE,  direction=_RD),
    ap_idr,

    RegisterDescriptor(_MEM, "DHCSR",     DHCSR_addr,        DHCSR_read,   direction=_RD),
    RegisterDescriptor(_MEM, "DHCSR",     DHCSR_addr,        DHCSR_write,  direction=_WR),
    RegisterDescriptor(_MEM, "DEMCR",     DEMCR_addr,        DEMCR),
    RegisterDescriptor(_MEM, "AIRCR",     AIRCR_addr,        AIRCR_read,   direction=_RD),
    RegisterDescriptor(_MEM, "AIRCR",     AIRCR_addr,        AIRCR_write,  direction=_WR),
])

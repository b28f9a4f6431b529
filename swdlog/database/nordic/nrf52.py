# Ref: nRF52832 Product Specification v1.4, 4.3 Debug and trace (CTRL-AP)

from ...support.bitstruct import *
from ...protocol.swd_log import Direction
from ...catalog import Space, RegisterDescriptor, RegisterCatalog, ap_idr
from ...profile import APProfile, DeviceProfile


__all__ = ["device"]


CTRL_AP_RESET_addr = 0x000

CTRL_AP_RESET = bitstruct("CTRL_AP_RESET", 32, [
    ("RESET",       1),
    (None,         31),
])

CTRL_AP_ERASEALL_addr = 0x004

CTRL_AP_ERASEALL = bitstruct("CTRL_AP_ERASEALL", 32, [
    ("ERASEALL",    1),
    (None,         31),
])

CTRL_AP_ERASEALLSTATUS_addr = 0x008

# 0 = ready, 1 = busy
CTRL_AP_ERASEALLSTATUS = bitstruct("CTRL_AP_ERASEALLSTATUS", 32, [
    ("BUSY",        1),
    (None,         31),
])

CTRL_AP_APPROTECTSTATUS_addr = 0x00C

# 0 = access port protection enabled, 1 = not enabled
CTRL_AP_APPROTECTSTATUS = bitstruct("CTRL_AP_APPROTECTSTATUS", 32, [
    ("STATUS",      1),
    (None,         31),
])


ctrl_ap_registers = RegisterCatalog([
    RegisterDescriptor(Space.AP, "RESET",           CTRL_AP_RESET_addr,
                       CTRL_AP_RESET),
    RegisterDescriptor(Space.AP, "ERASEALL",        CTRL_AP_ERASEALL_addr,
                       CTRL_AP_ERASEALL,        direction=Direction.WRITE),
    RegisterDescriptor(Space.AP, "ERASEALLSTATUS",  CTRL_AP_ERASEALLSTATUS_addr,
                       CTRL_AP_ERASEALLSTATUS,  direction=Direction.READ),
    RegisterDescriptor(Space.AP, "APPROTECTSTATUS", CTRL_AP_APPROTECTSTATUS_addr,
                       CTRL_AP_APPROTECTSTATUS, direction=Direction.READ),
    ap_idr,
])


device = DeviceProfile("nrf52", "Nordic Semiconductor nRF52 series", {
    0x00: APProfile(label="AHB-AP",  registers=None),
    0x01: APProfile(label="CTRL-AP", registers=ctrl_ap_registers),
})

# Ref: ARMv7-M Architecture Reference Manual, C1.6 Debug system registers
# Document Number: DDI0403E

from ...support.bitstruct import *


__all__ = [
    "DHCSR_addr", "DHCSR_read", "DHCSR_write",
    "DEMCR_addr", "DEMCR",
    "AIRCR_addr", "AIRCR_read", "AIRCR_write",
]


# Debug Halting Control and Status Register

DHCSR_addr = 0xE000EDF0

DHCSR_read = bitstruct("DHCSR_read", 32, [
    ("C_DEBUGEN",       1),
    ("C_HALT",          1),
    ("C_STEP",          1),
    ("C_MASKINTS",      1),
    (None,              1),
    ("C_SNAPSTALL",     1),
    (None,             10),
    ("S_REGRDY",        1),
    ("S_HALT",          1),
    ("S_SLEEP",         1),
    ("S_LOCKUP",        1),
    (None,              4),
    ("S_RETIRE_ST",     1),
    ("S_RESET_ST",      1),
    (None,              6),
])

# Writes are ignored unless DBGKEY is 0xA05F.
DHCSR_write = bitstruct("DHCSR_write", 32, [
    ("C_DEBUGEN",       1),
    ("C_HALT",          1),
    ("C_STEP",          1),
    ("C_MASKINTS",      1),
    (None,              1),
    ("C_SNAPSTALL",     1),
    (None,             10),
    ("DBGKEY",         16, HEX),
])


# Debug Exception and Monitor Control Register

DEMCR_addr = 0xE000EDFC

DEMCR = bitstruct("DEMCR", 32, [
    ("VC_CORERESET",    1),
    (None,              3),
    ("VC_MMERR",        1),
    ("VC_NOCPERR",      1),
    ("VC_CHKERR",       1),
    ("VC_STATERR",      1),
    ("VC_BUSERR",       1),
    ("VC_INTERR",       1),
    ("VC_HARDERR",      1),
    ("VC_SFERR",        1), # only in ARMv8-M
    (None,              4),
    ("MON_EN",          1),
    ("MON_PEND",        1),
    ("MON_STEP",        1),
    ("MON_REQ",         1),
    (None,              4),
    ("TRCENA",          1),
    (None,              7),
])


# Application Interrupt and Reset Control Register

AIRCR_addr = 0xE000ED0C

AIRCR_read = bitstruct("AIRCR_read", 32, [
    ("VECTRESET",       1),
    ("VECTCLRACTIVE",   1),
    ("SYSRESETREQ",     1),
    (None,              5),
    ("PRIGROUP",        3),
    (None,              4),
    ("ENDIANNESS",      1),
    ("VECTKEYSTAT",    16, HEX),
])

# Writes are ignored unless VECTKEY is 0x05FA.
AIRCR_write = bitstruct("AIRCR_write", 32, [
    ("VECTRESET",       1),
    ("VECTCLRACTIVE",   1),
    ("SYSRESETREQ",     1),
    (None,              5),
    ("PRIGROUP",        3),
    (None,              4),
    ("ENDIANNESS",      1),
    ("VECTKEY",        16, HEX),
])

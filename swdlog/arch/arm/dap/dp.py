# Ref: https://static.docs.arm.com/ihi0031/c/IHI0031C_debug_interface_as.pdf
# Document Number: IHI0031C

from ....support.bitstruct import *


__all__ = [
    "DP_IDCODE_addr", "DP_IDCODE",
    "DP_ABORT_addr", "DP_ABORT",
    "DP_CTRL_STAT_addr", "DP_CTRL_STAT",
    "DP_WCR_addr", "DP_WCR",
    "DP_SELECT_addr", "DP_SELECT",
    "DP_RESEND_addr", "DP_RESEND",
    "DP_RDBUFF_addr", "DP_RDBUFF",
]


# IDCODE DP register layout

DP_IDCODE_addr = 0x00 # R/O

DP_IDCODE = bitstruct("DP_IDCODE", 32, [
    (None,              1), # RAO
    ("DESIGNER",       11, HEX),
    ("PARTNO",         16, HEX),
    ("VERSION",         4),
])


# ABORT DP register layout

DP_ABORT_addr = 0x00 # W/O

DP_ABORT = bitstruct("DP_ABORT", 32, [
    ("DAPABORT",        1),
    ("STKCMPCLR",       1),
    ("STKERRCLR",       1),
    ("WDERRCLR",        1),
    ("ORUNERRCLR",      1),
    (None,             27),
])


# CTRL/STAT DP register layout (SELECT.CTRLSEL=0)

DP_CTRL_STAT_addr = 0x04 # R/W

DP_CTRL_STAT = bitstruct("DP_CTRL_STAT", 32, [
    ("ORUNDETECT",      1),
    ("STICKYORUN",      1),
    ("TRNMODE",         2),
    ("STICKYCMP",       1),
    ("STICKYERR",       1),
    ("READOK",          1),
    ("WDATAERR",        1),
    ("MASKLANE",        4, HEX),
    ("TRNCNT",         10),
    (None,              4),
    ("CDBGRSTREQ",      1),
    ("CDBGRSTACK",      1),
    ("CDBGPWRUPREQ",    1),
    ("CDBGPWRUPACK",    1),
    ("CSYSPWRUPREQ",    1),
    ("CSYSPWRUPACK",    1),
])


# WCR DP register layout (SELECT.CTRLSEL=1, SW-DP only)

DP_WCR_addr = 0x04 # R/W

DP_WCR = bitstruct("DP_WCR", 32, [
    ("PRESCALER",       3),
    (None,              3),
    ("WIREMODE",        2),
    ("TURNROUND",       2),
    (None,             22),
])


# SELECT DP register layout

DP_SELECT_addr = 0x08 # W/O

DP_SELECT = bitstruct("DP_SELECT", 32, [
    ("CTRLSEL",         1),
    (None,              3),
    ("APBANKSEL",       4, HEX),
    (None,             16),
    ("APSEL",           8, HEX),
])


# RESEND DP register layout

DP_RESEND_addr = 0x08 # R/O

DP_RESEND = bitstruct("DP_RESEND", 32, [
    ("DATA",           32, HEX),
])


# RDBUFF DP register layout

DP_RDBUFF_addr = 0x0C # R/O

DP_RDBUFF = bitstruct("DP_RDBUFF", 32, [
    ("DATA",           32, HEX),
])

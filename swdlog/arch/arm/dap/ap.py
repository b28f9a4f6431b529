# Ref: https://static.docs.arm.com/ihi0031/c/IHI0031C_debug_interface_as.pdf
# Document Number: IHI0031C

from ....support.bitstruct import *


__all__ = [
    "AP_IDR_addr", "AP_IDR",
    "MEM_AP_CSW_addr", "MEM_AP_CSW", "MEM_AP_TAR_addr", "MEM_AP_TAR",
    "MEM_AP_DRW_addr", "MEM_AP_DRW", "MEM_AP_BD_addr", "MEM_AP_BD",
    "MEM_AP_CFG_addr", "MEM_AP_CFG", "MEM_AP_BASE_addr", "MEM_AP_BASE",
]


# Generic AP register layout

AP_IDR_addr = 0xFC

AP_IDR = bitstruct("AP_IDR", 32, [
    ("TYPE",        4, HEX),
    ("VARIANT",     4, HEX),
    (None,          5),
    ("CLASS",       4, HEX),
    ("DESIGNER",   11, HEX),
    ("REVISION",    4),
])


# MEM-AP register layout

MEM_AP_CSW_addr = 0x00

MEM_AP_CSW = bitstruct("MEM_AP_CSW", 32, [
    ("Size",        3),
    (None,          1),
    ("AddrInc",     2),
    ("DeviceEn",    1),
    ("TrInProg",    1),
    ("Mode",        4),
    ("Type",        3),
    (None,          8),
    ("SPIDEN",      1),
    ("Prot",        7, HEX),
    ("DbgSwEnable", 1),
])

MEM_AP_TAR_addr = 0x04

MEM_AP_TAR = bitstruct("MEM_AP_TAR", 32, [
    ("ADDR",       32, HEX),
])

MEM_AP_DRW_addr = 0x0C

MEM_AP_DRW = bitstruct("MEM_AP_DRW", 32, [
    ("DATA",       32, HEX),
])

def MEM_AP_BD_addr(index: int):
    assert index in range(4)
    return 0x10 + (index << 2)

MEM_AP_BD = bitstruct("MEM_AP_BD", 32, [
    ("DATA",       32, HEX),
])

MEM_AP_CFG_addr = 0xF4

MEM_AP_CFG = bitstruct("MEM_AP_CFG", 32, [
    ("BE",          1),
    ("LA",          1),
    ("LD",          1),
    (None,         29),
])

MEM_AP_BASE_addr = 0xF8

MEM_AP_BASE = bitstruct("MEM_AP_BASE", 32, [
    ("P",           1),
    ("Format",      1),
    (None,         10),
    ("BASEADDR",   20, HEX),
])

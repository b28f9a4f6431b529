from collections import namedtuple

from .catalog import *


__all__ = ["APProfile", "DeviceProfile", "generic"]


# ``registers`` is the AP's own register catalog, or ``None`` for a MEM-AP described by the
# generic catalog.
APProfile = namedtuple("APProfile", ("label", "registers"))


class DeviceProfile:
    """
    A silicon family's view of its access ports, keyed by ``SELECT.APSEL``.

    APs that the profile does not list are assumed to be generic MEM-APs.
    """
    def __init__(self, name, description, access_ports=None):
        self.name         = name
        self.description  = description
        self.access_ports = dict(access_ports or {})

    def __repr__(self):
        return f"<{self.__module__}.{self.__class__.__name__} {self.name}>"

    def label(self, apsel):
        access_port = self.access_ports.get(apsel)
        if access_port is None:
            return None
        return access_port.label

    def is_mem_ap(self, apsel):
        access_port = self.access_ports.get(apsel)
        return access_port is None or access_port.registers is None

    def catalog(self, apsel):
        """Return the catalog that describes the bank of AP ``apsel``."""
        if self.is_mem_ap(apsel):
            return registers
        return self.access_ports[apsel].registers


generic = DeviceProfile("generic", "ARM ADIv5 SW-DP with MEM-APs only")

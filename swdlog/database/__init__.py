from ..profile import generic
from .nordic import nrf52


__all__ = ["devices"]


devices = {
    "generic": generic,
    "nrf52":   nrf52.device,
}

"""Card counting systems."""

from typing import Mapping

from bjpractice.counting.base import CountingSystem, CountingSystemName
from bjpractice.counting.hilo import HiLoSystem
from bjpractice.counting.hiopt import HiOpt1System, HiOpt2System
from bjpractice.counting.ko import KOSystem
from bjpractice.counting.omega2 import Omega2System

COUNTING_SYSTEMS: Mapping[CountingSystemName, CountingSystem] = {
    system.identifier: system
    for system in (
        HiLoSystem(),
        KOSystem(),
        Omega2System(),
        HiOpt1System(),
        HiOpt2System(),
    )
}

__all__ = [
    "COUNTING_SYSTEMS",
    "CountingSystem",
    "CountingSystemName",
    "HiLoSystem",
    "HiOpt1System",
    "HiOpt2System",
    "KOSystem",
    "Omega2System",
]

"""Event bus and derived views."""

from hooter.core.bus.hooter import Hooter, Predicate
from hooter.core.bus.views import DerivedHooter, FilteredHooter, PrefixedHooter

__all__ = ["Hooter", "Predicate", "DerivedHooter", "PrefixedHooter", "FilteredHooter"]

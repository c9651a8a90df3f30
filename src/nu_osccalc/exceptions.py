# nu_osccalc/exceptions.py

class OscCalcError(Exception):
    """Base exception for oscillation calculator errors."""
    pass

class UndefinedChannelError(OscCalcError, ValueError):
    """Raised when a flavor code is not one of ±12, ±14, ±16."""
    pass

class EnergyNotCachedError(OscCalcError, KeyError):
    """Raised when an unchecked lookup asks for an energy absent from the cache."""
    pass

class EngineOutputError(OscCalcError):
    """Raised when a physics engine returns a block of the wrong shape."""
    pass

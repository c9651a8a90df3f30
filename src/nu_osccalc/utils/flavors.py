from nu_osccalc.exceptions import UndefinedChannelError

# PDG codes, negative for antineutrinos
NUE = 12
NUMU = 14
NUTAU = 16
NUE_BAR = -NUE
NUMU_BAR = -NUMU
NUTAU_BAR = -NUTAU

N_CHANNELS = 18


def is_antineutrino(flavor: int) -> bool:
    return flavor < 0


def flavor_slot(flavor: int) -> int:
    """Map a signed PDG code onto its propagator index (electron/muon/tau)."""
    if abs(flavor) not in (NUE, NUMU, NUTAU):
        raise UndefinedChannelError(f"Undefined neutrino flavor code: {flavor!r}")
    return (abs(flavor) - NUE) // 2


def channel_index(before: int, after: int) -> int:
    """
    Column of the (before -> after) channel in the cached probability matrix.

    Columns are laid out as
        11 21 31 12 22 32 13 23 33 -11 -21 -31 -12 -22 -32 -13 -23 -33
    with 1=nue, 2=numu, 3=nutau, i.e. a 3x3 before x after block flattened
    by the "after" flavor, neutrinos first. The antineutrino block is chosen
    by the sign of `before`.
    """
    i = flavor_slot(before)
    j = flavor_slot(after)
    anti_block = 0 if before > 0 else 9
    return int(anti_block + 3 * j + i)

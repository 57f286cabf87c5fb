"""Battery capacity readings from the Linux power_supply class."""
import glob
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

POWER_SUPPLY_ROOT = "/sys/class/power_supply"

# energy_* is reported in µWh, charge_* in µAh; either pair is used as-is
_DESIGN_FILES = ("energy_full_design", "charge_full_design")
_FULL_FILES = ("energy_full", "charge_full")


def find_battery_dir(root: str = POWER_SUPPLY_ROOT) -> Optional[str]:
    """Return the first BAT* directory under root, if any."""
    candidates = sorted(glob.glob(os.path.join(root, "BAT*")))
    return candidates[0] if candidates else None


def _read_text(path: str) -> Optional[str]:
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except OSError:
        return None


def _read_number(battery_dir: str, names) -> Optional[float]:
    for name in names:
        text = _read_text(os.path.join(battery_dir, name))
        if text is None:
            continue
        try:
            return float(text)
        except ValueError:
            logger.debug("Ignoring non-numeric %s: %r", name, text)
    return None


def read_battery_details(root: str = POWER_SUPPLY_ROOT) -> dict:
    """Read status and capacities; missing values come back as None."""
    battery_dir = find_battery_dir(root)
    if battery_dir is None:
        return {"status": None, "design_capacity": None, "full_charge_capacity": None}

    return {
        "status": _read_text(os.path.join(battery_dir, "status")),
        "design_capacity": _read_number(battery_dir, _DESIGN_FILES),
        "full_charge_capacity": _read_number(battery_dir, _FULL_FILES),
    }

"""
config.py
Central configuration for Neighbourhood Watch.
Contains watchdog thresholds, probing settings, GPIO addressing and logging.
"""

from pathlib import Path

# --- Base Paths ---
BASE_DIR = Path(__file__).resolve().parent
LOG_DIR = BASE_DIR / "data" / "logs"

# --- Watchdog Settings ---
WATCHDOG = {
    "universe": "pine1,pine2,pine3,pine4,pine5",
    "timeout": 600,          # seconds without contact before the neighbour is dead
    "interval": 1.0,         # seconds between ticks
    "min_interval": 1.0,
    "max_interval": 10.0,
    "universe_window": 30.0, # seconds a universe member counts as reachable
    "quorum": 2,             # reachable universe members needed to trust ourselves
}

# --- Prober Settings ---
PROBER = {
    "interval": 1.0,  # seconds between ping rounds
    "timeout": 1.0,   # seconds to wait for an echo reply
}

# --- Reset Line ---
# Determined by the physical build of the Pine64 cluster: gpiochip1, line 34,
# active low.
ACTUATOR = {
    "chip": "/dev/gpiochip1",
    "line": 34,
    "pulse_s": 1.0,
    "consumer": "reset",
    "countdown_s": 5.0,  # reset-neighbour tool only
}

# --- Logging ---
LOGGING = {
    "level": "ERROR",
    "format": "[%(asctime)s] %(levelname)s %(message)s",
    "log_to_file": False,
    "filename": str(LOG_DIR / "neighbourhood_watch.log"),
}

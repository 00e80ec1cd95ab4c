"""
Global configuration and constants for PrimeSwitch
"""

import os
from pathlib import Path

# Application metadata
APP_NAME = "PrimeSwitch"
APP_VERSION = "0.1.0"
APP_AUTHOR = "PrimeSwitch Developers"
APP_DESCRIPTION = "NVIDIA Prime GPU switcher"

# Helper binaries, searched on PATH in priority order
HELPER_CANDIDATES = {
    'sudo': ['pkexec', 'gksudo'],
    'select': ['prime-select'],
    'management': ['nvidia-smi'],
    'settings': ['nvidia-settings'],
}

# Alternative role names
HELPER_ALIASES = {
    'sudo-runner': 'sudo',
    'selector': 'select',
    'manager': 'management',
    'settings-ui': 'settings',
}

# File rewritten by prime-select on every profile change
PRIME_INDEX_FILE = "/etc/prime-discrete"

# GPU identities
GPU_INTEL = "intel"
GPU_NVIDIA = "nvidia"
GPU_ON_DEMAND = "on-demand"
GPU_UNKNOWN = "unknown"
GPU_TARGETS = (GPU_INTEL, GPU_NVIDIA, GPU_ON_DEMAND)

# Subprocess
COMMAND_TIMEOUT = 30  # seconds, synchronous helpers only

# Logging
LOG_LEVEL = os.getenv("PRIMESWITCH_LOG_LEVEL", "INFO").upper()  # DEBUG, INFO, WARNING, ERROR
LOG_FILE = Path(os.getenv(
    "PRIMESWITCH_LOG_FILE",
    Path.home() / ".local" / "share" / "primeswitch" / "primeswitch.log"
))

# Ensure log directory exists
try:
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
except OSError:
    pass

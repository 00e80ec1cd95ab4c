"""
GPU switch model for UI representation
"""

from dataclasses import dataclass

import config
from models.shell_result import CommandOutcome


GPU_LABELS = {
    config.GPU_INTEL: "Intel (integrated)",
    config.GPU_NVIDIA: "NVIDIA (discrete)",
    config.GPU_ON_DEMAND: "NVIDIA On-Demand",
    config.GPU_UNKNOWN: "Unknown",
}


def gpu_label(gpu: str) -> str:
    """Get display-friendly name for a GPU identity"""
    return GPU_LABELS.get(gpu, gpu)


@dataclass
class SwitchResult:
    """Outcome of a prime-select switch, handed to switch callbacks"""

    gpu: str
    result: bool
    outcome: CommandOutcome = CommandOutcome.OK
    stderr: str = ""

    @property
    def display_name(self) -> str:
        return gpu_label(self.gpu)

    @property
    def status_text(self) -> str:
        """Get status description"""
        if self.result:
            return f"Switched to {self.display_name}. Log out to apply."
        if self.stderr:
            return f"Could not switch to {self.display_name}: {self.stderr}"
        return f"Could not switch to {self.display_name}"

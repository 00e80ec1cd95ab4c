"""
Checks for the helper binaries PrimeSwitch shells out to.
"""
from typing import List, Tuple

from backend.helper_resolver import HelperResolver
from utils.logger import logger

# --- Packages providing each helper role ---
REQUIRED_PACKAGES = {
    'debian': {
        'sudo': 'pkexec',
        'select': 'nvidia-prime',
        'management': 'nvidia-utils',
        'settings': 'nvidia-settings',
    },
    'redhat': {
        'sudo': 'polkit',
        'select': 'nvidia-prime',
        'management': 'xorg-x11-drv-nvidia-cuda',
        'settings': 'nvidia-settings',
    },
}

# prime-select and a privilege runner are needed to switch at all
REQUIRED_ROLES = ['sudo', 'select']


class DependencyChecker:
    """Checks for helper dependencies"""

    def __init__(self, resolver: HelperResolver = None, os_release: str = '/etc/os-release'):
        self.resolver = resolver if resolver is not None else HelperResolver()
        self.os_release = os_release
        self.distro = self._detect_distro()

    def _detect_distro(self) -> str:
        """Detect Linux distribution"""
        try:
            with open(self.os_release) as f:
                for line in f:
                    if line.startswith('ID_LIKE='):
                        if 'debian' in line:
                            return 'debian'
                        if 'fedora' in line or 'rhel' in line:
                            return 'redhat'
                    if line.startswith('ID='):
                        if 'debian' in line or 'ubuntu' in line:
                            return 'debian'
                        if 'fedora' in line or 'rhel' in line or 'centos' in line:
                            return 'redhat'
        except OSError:
            logger.warning("Could not detect distro, assuming debian-like")
            return 'debian'
        return 'debian'

    def check_all_dependencies(self) -> Tuple[bool, List[str]]:
        """
        Check that the helpers needed for switching exist

        Returns:
            (ok, missing roles). Optional roles are listed but do not fail the check.
        """
        missing = self.resolver.missing()
        for role in missing:
            logger.warning(f"Missing helper: {role}")

        if any(role in REQUIRED_ROLES for role in missing):
            return False, missing

        if not missing:
            logger.info("All helper dependencies are satisfied")
        return True, missing

    def get_install_command(self, missing_roles: List[str]) -> str:
        """Get install command for missing helpers"""
        if not missing_roles:
            return ""

        packages = REQUIRED_PACKAGES.get(self.distro, {})
        if not packages:
            return "Distro not supported for automatic package suggestions."

        names = []
        for role in missing_roles:
            package = packages.get(role)
            if package and package not in names:
                names.append(package)

        if not names:
            return "Please install missing packages manually."

        if self.distro == 'debian':
            return f"sudo apt install -y {' '.join(names)}"
        elif self.distro == 'redhat':
            return f"sudo dnf install -y {' '.join(names)}"

        return "Please install missing packages manually."

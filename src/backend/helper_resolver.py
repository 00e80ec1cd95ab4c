"""
Helper binary lookup
Resolves each helper role to the first matching executable on PATH
"""

import shutil
from typing import Dict, List, Optional

import config
from utils.logger import logger


class HelperResolver:
    """Resolves helper roles (sudo, select, management, settings) once"""

    def __init__(self, candidates: Optional[Dict[str, List[str]]] = None):
        candidates = candidates if candidates is not None else config.HELPER_CANDIDATES
        self._commands: Dict[str, Optional[str]] = {}

        for role, names in candidates.items():
            self._commands[role] = self._which(names)
            if self._commands[role]:
                logger.debug(f"Helper '{role}' resolved to {self._commands[role]}")
            else:
                logger.debug(f"Helper '{role}' not found (tried {', '.join(names)})")

    @staticmethod
    def _which(names: List[str]) -> Optional[str]:
        for name in names:
            path = shutil.which(name)
            if path:
                return path
        return None

    def resolve(self, role: str) -> Optional[str]:
        """
        Get helper path for a role

        Args:
            role: sudo|select|management|settings (or an alias from config.HELPER_ALIASES)

        Returns:
            Absolute path, or None when the helper is missing or the role is unknown
        """
        role = config.HELPER_ALIASES.get(role, role)
        return self._commands.get(role)

    def missing(self) -> List[str]:
        """Roles with no executable on PATH"""
        return [role for role, path in self._commands.items() if not path]

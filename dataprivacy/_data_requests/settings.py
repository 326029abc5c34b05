"""Settings for the data request workflow."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dataprivacy.exceptions import ConfigurationError


@dataclass
class DataRequestSettings:
    """
    Site settings for data requests.

    Loaded from DATAPRIVACY_* environment variables:
    - DATAPRIVACY_DPO_ROLES: Comma-separated role IDs mapped to the DPO role
    - DATAPRIVACY_CONTACT_DPO: Whether users may contact the DPO (default: true)
    - DATAPRIVACY_DPO_FALLBACK_TO_ADMIN: Whether the site admin acts as DPO
      when no user holds a DPO role (default: true)

    Attributes:
        dpo_roles: Role IDs whose holders act as data protection officers
        contact_dpo: Whether users may contact the DPO
        dpo_fallback_to_admin: Whether the admin acts as DPO when there is none
    """

    ENV_PREFIX = "DATAPRIVACY"

    dpo_roles: List[int] = field(default_factory=list)
    contact_dpo: bool = True
    dpo_fallback_to_admin: bool = True

    @classmethod
    def from_env(cls) -> "DataRequestSettings":
        """
        Load settings from environment variables.

        Raises:
            ConfigurationError: If DATAPRIVACY_DPO_ROLES is not a list of integers
        """
        return cls(
            dpo_roles=cls.parse_role_ids(cls._get_env("DPO_ROLES", "")),
            contact_dpo=cls._get_env_bool("CONTACT_DPO", True),
            dpo_fallback_to_admin=cls._get_env_bool("DPO_FALLBACK_TO_ADMIN", True),
        )

    @staticmethod
    def parse_role_ids(value: Optional[str]) -> List[int]:
        """Parse a comma-separated list of role IDs."""
        roles: List[int] = []
        for part in (value or "").split(","):
            part = part.strip()
            if not part:
                continue
            try:
                roles.append(int(part))
            except ValueError:
                raise ConfigurationError(f"Invalid DPO role ID: '{part}'. Expected comma-separated integers")
        return roles

    @classmethod
    def _get_env(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable with prefix."""
        return os.getenv(f"{cls.ENV_PREFIX}_{key}", default)

    @classmethod
    def _get_env_bool(cls, key: str, default: bool = False) -> bool:
        """Get boolean environment variable with prefix."""
        value = cls._get_env(key)
        if value is None:
            return default
        return value.lower() in ("true", "yes", "1", "on")

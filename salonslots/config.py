"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import MINUTES_PER_DAY
from .services.permissions import DEFAULT_ROLE_PERMISSIONS, RolePermissionTable


class DefaultsConfig(BaseModel):
    """Default settings for checks and slot listings."""
    service_duration_minutes: int = 60
    step_minutes: int = 15

    @field_validator("service_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("service_duration_minutes must be greater than zero")
        return value

    @field_validator("step_minutes")
    @classmethod
    def validate_step(cls, value: int) -> int:
        """Ensure the slot step fits within one day."""
        if not 0 < value <= MINUTES_PER_DAY:
            raise ValueError(f"step_minutes must be between 1 and {MINUTES_PER_DAY}, got {value}")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    schedule_file: Path = Path("schedule.yaml")
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    timezone: str = "Europe/Berlin"  # only used to resolve "today"
    roles: Dict[str, List[str]] = Field(
        default_factory=lambda: {role: sorted(grants) for role, grants in DEFAULT_ROLE_PERMISSIONS.items()}
    )
    base_dir: Optional[Path] = Field(default=None, exclude=True)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Ensure every grant has the ``area:action`` shape."""
        for role, grants in value.items():
            malformed = [g for g in grants if g.count(":") != 1]
            if malformed:
                raise ValueError(f"Role '{role}' has malformed grants: {malformed}")
        return value

    def resolve_schedule_path(self) -> Path:
        """Resolve the schedule file relative to the config file's directory."""
        if self.schedule_file.is_absolute() or self.base_dir is None:
            return self.schedule_file
        return self.base_dir / self.schedule_file

    def permission_table(self) -> RolePermissionTable:
        """Build the permission gate from the configured role grants."""
        return RolePermissionTable(self.roles)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        data["base_dir"] = config_path.resolve().parent
        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path

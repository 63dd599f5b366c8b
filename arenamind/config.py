"""
Arenamind Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Engine configuration loaded from environment variables."""

    # Map conventions
    # Every combatant starts the game in area 1 (the cornucopia).
    STAGING_AREA_ID: int = int(os.getenv("ARENAMIND_STAGING_AREA_ID", "1"))

    # Actor memory/inventory bounds
    INVENTORY_LIMIT: int = int(os.getenv("ARENAMIND_INVENTORY_LIMIT", "7"))
    RECENT_AREAS_LIMIT: int = int(os.getenv("ARENAMIND_RECENT_AREAS", "4"))

    # Example runner
    DEFAULT_SEED: int = int(os.getenv("ARENAMIND_DEFAULT_SEED", "42"))

    # Logging
    VERBOSE: bool = _env_flag("ARENAMIND_VERBOSE")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    EXAMPLES_DIR: Path = PROJECT_ROOT / "examples"
    ITEMS_PATH: Path = Path(os.getenv("ARENAMIND_ITEMS_PATH", str(EXAMPLES_DIR / "items.json")))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.INVENTORY_LIMIT < 1:
            raise ValueError(
                "ARENAMIND_INVENTORY_LIMIT must be at least 1 "
                f"(got {cls.INVENTORY_LIMIT})"
            )

        if cls.RECENT_AREAS_LIMIT < 1:
            raise ValueError(
                "ARENAMIND_RECENT_AREAS must be at least 1 "
                f"(got {cls.RECENT_AREAS_LIMIT})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Arenamind Configuration:",
            f"  Staging Area: {cls.STAGING_AREA_ID}",
            f"  Inventory Limit: {cls.INVENTORY_LIMIT}",
            f"  Recent Areas: {cls.RECENT_AREAS_LIMIT}",
            f"  Default Seed: {cls.DEFAULT_SEED}",
            f"  Verbose: {cls.VERBOSE}",
            f"  Items: {cls.ITEMS_PATH}",
        ]
        return "\n".join(lines)

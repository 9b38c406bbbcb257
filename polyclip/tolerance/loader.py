"""Named tolerance profiles and the process-wide tolerance setting.

Profiles are YAML files under ``polyclip/profiles``. The active setting is
read once per geometry call; ``configure_tolerance`` replaces it.
"""

from pathlib import Path

import structlog

from ..models.tolerance import ToleranceConfig

logger = structlog.get_logger(__name__)

# Default profiles directory (inside the package for proper wheel packaging)
PROFILES_DIR = Path(__file__).parent.parent / "profiles"

DEFAULT_PROFILE = "default"

# Active process-wide settings, loaded lazily on first use
_ACTIVE_TOLERANCE: ToleranceConfig | None = None


def get_profile_path(name: str = DEFAULT_PROFILE) -> Path:
    """Get the path to a tolerance profile file.

    Args:
        name: Profile name (without .yaml extension)

    Returns:
        Path to the profile YAML file

    Raises:
        FileNotFoundError: If profile doesn't exist
    """
    path = PROFILES_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Tolerance profile '{name}' not found at {path}")
    return path


def list_profiles() -> list[dict[str, str]]:
    """Shipped profiles by name, each with its header comment as description."""
    paths = sorted(PROFILES_DIR.glob("*.yaml"))
    if not paths:
        logger.warning("no_tolerance_profiles", path=str(PROFILES_DIR))
    return [{"name": path.stem, "description": _profile_summary(path)} for path in paths]


def _profile_summary(path: Path) -> str:
    # Profiles open with a "# ..." header line; fall back to the settings themselves
    text = path.read_text()
    header = text.split("\n", 1)[0]
    if header.startswith("#"):
        return header.strip("# ")
    config = ToleranceConfig.from_yaml(text)
    return f"absolute={config.absolute:g}, relative={config.relative:g}"


def load_tolerance(
    name: str = DEFAULT_PROFILE,
    override: dict | None = None,
) -> ToleranceConfig:
    """Load a tolerance profile from YAML file with optional overrides.

    Args:
        name: Profile name (without .yaml extension)
        override: Optional dict of values to override

    Returns:
        ToleranceConfig instance with merged overrides
    """
    path = get_profile_path(name)

    with open(path) as f:
        yaml_content = f.read()

    config = ToleranceConfig.from_yaml(yaml_content)

    if override:
        config = config.merge_override(override)
        logger.debug("tolerance_override_applied", profile=name, override=override)

    return config


def configure_tolerance(
    config: ToleranceConfig | None = None,
    profile: str | None = None,
    override: dict | None = None,
) -> ToleranceConfig:
    """Set the process-wide tolerance.

    Intended to be called once at startup. Each geometry operation reads
    the active value once and uses it for the whole call.

    Args:
        config: Explicit settings (takes precedence over profile)
        profile: Named profile to load when no config is given
        override: Optional dict of values merged on top

    Returns:
        The now-active ToleranceConfig
    """
    global _ACTIVE_TOLERANCE
    if config is None:
        config = load_tolerance(profile or DEFAULT_PROFILE)
    if override:
        config = config.merge_override(override)
    _ACTIVE_TOLERANCE = config
    logger.info(
        "tolerance_configured",
        absolute=config.absolute,
        relative=config.relative,
        sliver_area=config.sliver_area,
    )
    return config


def get_tolerance() -> ToleranceConfig:
    """Get the active tolerance, loading the default profile on first use."""
    global _ACTIVE_TOLERANCE
    if _ACTIVE_TOLERANCE is None:
        try:
            _ACTIVE_TOLERANCE = load_tolerance(DEFAULT_PROFILE)
        except FileNotFoundError:
            logger.warning("tolerance_profile_missing", profile=DEFAULT_PROFILE)
            _ACTIVE_TOLERANCE = ToleranceConfig()
    return _ACTIVE_TOLERANCE


def reset_tolerance() -> None:
    """Forget the active tolerance so the next read reloads the default profile."""
    global _ACTIVE_TOLERANCE
    _ACTIVE_TOLERANCE = None

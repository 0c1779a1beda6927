import os
from pathlib import Path


class PathResolver:
    """Central authority for file path resolution in stagecraft.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.work_dir = Path(os.getenv("STAGECRAFT_WORKDIR", os.getcwd()))

    def get_pipeline_config_path(self) -> Path:
        """Get the path to the pipeline configuration file.

        Checks STAGECRAFT_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("STAGECRAFT_CONFIG")
        if config_path:
            return Path(config_path)

        return self.work_dir / "stagecraft.yaml"

    def get_backup_path(self, config_path: Path) -> Path:
        """Get the path a config is copied to before it is overwritten."""
        return config_path.with_name(f"{config_path.name}.backup")

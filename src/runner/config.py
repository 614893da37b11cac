"""Runner configuration.

Values come from keyword arguments or from ``PAGEC_*`` environment
variables. A ``.env`` file at the repository root is loaded first when it
exists, so local settings do not need to be exported.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Page object documents the runner picks up
DEFAULT_FILE_PATTERNS = ("*.utam.json",)

ENV_PREFIX = "PAGEC_"


class RunnerConfig(BaseModel):
    """Configuration for a batch compilation run."""

    source_dir: Path = Field(..., description="Directory scanned for page object documents")
    output_dir: Path = Field(..., description="Directory generated source is written to")
    module_name: str | None = Field(
        default=None, description="Module name used as the first package segment"
    )
    package_root: str = Field(
        default="pageobjects", description="Package segment appended after the module name"
    )
    max_workers: int = Field(default=4, ge=1, description="Page objects translated in parallel")
    file_patterns: tuple[str, ...] = Field(
        default=DEFAULT_FILE_PATTERNS, description="Glob patterns of page object documents"
    )

    @property
    def base_package(self) -> str:
        """Package all generated page objects live under, e.g. ``my.app.pageobjects``."""
        parts = []
        if self.module_name:
            parts.append(self.module_name.replace("-", "."))
        if self.package_root:
            parts.append(self.package_root)
        return ".".join(parts)

    @classmethod
    def from_env(cls, **overrides) -> "RunnerConfig":
        """Build configuration from the environment.

        Reads PAGEC_SOURCE_DIR, PAGEC_OUTPUT_DIR, PAGEC_MODULE,
        PAGEC_PACKAGE_ROOT and PAGEC_WORKERS. Keyword arguments that are not
        None take precedence over the environment.
        """
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        values = {
            "source_dir": os.getenv(f"{ENV_PREFIX}SOURCE_DIR"),
            "output_dir": os.getenv(f"{ENV_PREFIX}OUTPUT_DIR"),
            "module_name": os.getenv(f"{ENV_PREFIX}MODULE"),
            "package_root": os.getenv(f"{ENV_PREFIX}PACKAGE_ROOT"),
            "max_workers": os.getenv(f"{ENV_PREFIX}WORKERS"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**{key: value for key, value in values.items() if value is not None})

"""
Run configuration - one explicit value passed through every step
"""
import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml

from .models.toolchain import SourceFile, Toolchain
from .toolchain_selector import build_toolchain_table, select_toolchain

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuration file is unreadable or malformed"""


@dataclass(frozen=True)
class RunConfig:
    """Everything a run needs, fixed for the run's lifetime"""
    source_file: SourceFile
    filters: Tuple[str, ...] = ()
    work_dir: Path = field(default_factory=Path.cwd)
    output_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    toolchains: Dict[str, Toolchain] = field(default_factory=build_toolchain_table)

    @property
    def toolchain(self) -> Toolchain:
        return select_toolchain(self.source_file, self.toolchains)

    def captured_output_path(self, input_name: str) -> Path:
        """Where the program's stdout for `input_name` is written"""
        return self.output_dir / f"{input_name}.out"


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    logger.info(f"✓ Loaded configuration from: {config_path}")
    return config


def parse_toolchains(raw: Any) -> Dict[str, Toolchain]:
    """
    Parse the `toolchains:` section of a configuration file

    Expected format:
        toolchains:
          .py:
            compile: []
            run: [python3, "{source}"]
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("'toolchains' must map extensions to commands")

    toolchains: Dict[str, Toolchain] = {}
    for extension, entry in raw.items():
        extension = str(extension)
        if not extension.startswith("."):
            extension = "." + extension
        if not isinstance(entry, dict):
            raise ConfigError(f"toolchain '{extension}' must be a mapping")

        run = entry.get("run")
        compile_ = entry.get("compile") or []
        if not isinstance(run, list) or not run:
            raise ConfigError(f"toolchain '{extension}' needs a non-empty 'run' list")
        if not isinstance(compile_, list):
            raise ConfigError(f"toolchain '{extension}': 'compile' must be a list")

        toolchain = Toolchain(
            name=str(entry.get("name", extension.lstrip("."))),
            compile_template=tuple(str(part) for part in compile_),
            run_template=tuple(str(part) for part in run),
        )
        _check_placeholders(extension, "compile", toolchain.compile_template)
        _check_placeholders(extension, "run", toolchain.run_template)
        toolchains[extension] = toolchain
    return toolchains


def _check_placeholders(extension: str, key: str, template: Tuple[str, ...]) -> None:
    """Only {source} and {basename} may appear; literal braces are written {{ }}"""
    for part in template:
        try:
            part.format(source="", basename="")
        except (IndexError, KeyError, ValueError) as e:
            raise ConfigError(
                f"toolchain '{extension}': bad placeholder in {key} argument '{part}' ({e})"
            ) from e


def build_run_config(
    source_file: str,
    filters: Sequence[str] = (),
    config_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    work_dir: Optional[Path] = None,
) -> RunConfig:
    """
    Build the run configuration from CLI arguments and an optional YAML file

    CLI options take precedence over the configuration file.
    """
    file_config = load_config_file(config_path) if config_path else {}

    resolved_output = output_dir or file_config.get("output_dir")
    toolchains = build_toolchain_table(parse_toolchains(file_config.get("toolchains")))

    kwargs: Dict[str, Any] = {
        "source_file": SourceFile(Path(source_file)),
        "filters": tuple(filters),
        "toolchains": toolchains,
    }
    if resolved_output:
        kwargs["output_dir"] = Path(str(resolved_output))
    if work_dir is not None:
        kwargs["work_dir"] = work_dir

    return RunConfig(**kwargs)

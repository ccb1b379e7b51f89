"""Run configuration: config files and command-line overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomli
import yaml
from pydantic import BaseModel, Field, ValidationError

from zipinfo.core.errors import ConfigurationError
from zipinfo.core.mode import FailurePolicy, OutputMode
from zipinfo.core.types import StatSelection


class ReportConfig(BaseModel):
    """Settings for one reporting run.

    Attributes
    ----------
    output
        Output mode.
    exclude
        Glob pattern of entry names to leave out.
    on_error
        What to do when an archive cannot be read.
    jobs
        Number of archives read concurrently.
    stats
        Statistics to show; None shows all of them.
    """

    output: OutputMode = OutputMode.FLAT
    exclude: str | None = None
    on_error: FailurePolicy = FailurePolicy.FAIL_FAST
    jobs: int = Field(default=1, ge=1)
    stats: StatSelection | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def selection(self) -> StatSelection:
        """Effective statistic selection."""
        return self.stats or StatSelection.all()


def load_config(path: Path) -> ReportConfig:
    """Load a ReportConfig from a YAML or TOML file.

    Parameters
    ----------
    path
        Config file; ``.yaml``/``.yml`` are read as YAML, ``.toml`` as TOML.

    Returns
    -------
    ReportConfig
        Validated configuration.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed or validated.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file: {path}") from e
    data = _parse_config_text(text, suffix=path.suffix, path=path)
    try:
        return ReportConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def _parse_config_text(text: str, *, suffix: str, path: Path) -> dict[str, Any]:
    suf = suffix.lower()
    if suf in (".yml", ".yaml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML config: {path}") from e
    elif suf == ".toml":
        try:
            data = tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse TOML config: {path}") from e
    else:
        raise ConfigurationError(f"Unsupported config file type: {path}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


def merge_cli(
    config: ReportConfig,
    *,
    json: bool = False,
    pretty_json: bool = False,
    exclude: str | None = None,
    toggles: dict[str, bool] | None = None,
    keep_going: bool = False,
    jobs: int | None = None,
) -> ReportConfig:
    """Apply command-line flags on top of ``config``.

    Parameters
    ----------
    config
        Base configuration (defaults or a loaded file).
    json, pretty_json
        Output mode flags; at most one may be set.
    exclude
        Exclude pattern overriding the configured one.
    toggles
        Statistic flags; when any is set they replace the configured stats.
    keep_going
        Switch the failure policy to ``continue``.
    jobs
        Concurrency overriding the configured one.

    Raises
    ------
    ConfigurationError
        If both output flags are set or ``jobs`` is below 1.
    """
    if json and pretty_json:
        raise ConfigurationError("--json and --pretty-json are mutually exclusive")

    update: dict[str, Any] = {}
    if json:
        update["output"] = OutputMode.JSON
    elif pretty_json:
        update["output"] = OutputMode.PRETTY_JSON
    if exclude is not None:
        update["exclude"] = exclude
    if toggles and any(toggles.values()):
        update["stats"] = StatSelection(**toggles)
    if keep_going:
        update["on_error"] = FailurePolicy.CONTINUE
    if jobs is not None:
        update["jobs"] = jobs

    try:
        return ReportConfig.model_validate({**config.model_dump(), **update})
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e

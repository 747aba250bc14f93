from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml

from .errors import ErrorCode, configError
from .loggingSetup import mapLogLevel
from .output import parseOutputFormat


@dataclass(frozen=True)
class Settings:
    # Logging
    log_dir: str = "./logs"
    log_level: str = "INFO"
    log_file: bool = True

    # Output
    output_format: str = "text"


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise configError(ErrorCode.INVALID_CONFIG, f"Invalid config file {path}: {exc}", path=str(path)) from exc
        if not isinstance(data, dict):
            return {}
        # "key:" without a value counts as absent
        return {k: v for k, v in data.items() if v is not None}


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def parse_bool(v: str | bool | None) -> bool | None:
    if v is None or isinstance(v, bool):
        return v
    vv = str(v).strip().lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise configError(ErrorCode.INVALID_BOOLEAN, f"Invalid boolean value: {v}", value=str(v))


def loadSettings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    # 2) env
    env = {
        "log_dir": _env_get("IDSOURCE_LOG_DIR"),
        "log_level": _env_get("IDSOURCE_LOG_LEVEL"),
        "log_file": _env_get("IDSOURCE_LOG_FILE"),
        "output_format": _env_get("IDSOURCE_OUTPUT_FORMAT"),
    }
    if any(v is not None for v in env.values()):
        sources.append("env")

    # merge config -> env -> cli
    merged = {
        "log_dir": cfg.get("log_dir", defaults.log_dir),
        "log_level": cfg.get("log_level", defaults.log_level),
        "log_file": cfg.get("log_file", defaults.log_file),
        "output_format": cfg.get("output_format", defaults.output_format),
    }

    for k, v in env.items():
        if v is not None:
            merged[k] = v

    # 3) apply CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    logLevel = str(merged["log_level"]).strip().upper()
    try:
        mapLogLevel(logLevel)
    except ValueError as exc:
        raise configError(ErrorCode.INVALID_LOG_LEVEL, str(exc), value=merged["log_level"]) from exc

    settings = Settings(
        log_dir=str(merged["log_dir"]),
        log_level=logLevel,
        log_file=bool(parse_bool(merged["log_file"])),
        output_format=parseOutputFormat(str(merged["output_format"])).value,
    )

    return LoadedSettings(settings=settings, sources_used=sources)

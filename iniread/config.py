import os
import sys
from dataclasses import MISSING, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from iniread.accessors import Status, read_bool, read_str
from iniread.logger import LogLevel, coerce_log_level
from iniread.parser import load

CONFIG_SECTION = "iniread"
ENV_PREFIX = "INIREAD_"


def _get_default_config_dirs() -> list[Path]:
    """Get platform-appropriate config directories, lowest precedence first."""
    dirs = [Path(f"{sys.prefix}/share/iniread")]

    if os.name == 'nt':
        appdata = os.getenv("APPDATA", os.path.expanduser("~/AppData/Roaming"))
        dirs.append(Path(os.path.join(appdata, "iniread")))
    else:
        dirs.extend(
            [
                Path("/etc/iniread"),
                Path(os.path.expanduser(os.path.join(os.getenv("XDG_CONFIG_HOME", "~/.config"), "iniread"))),
            ]
        )

    return dirs


DEFAULT_CONFIG_DIRS = _get_default_config_dirs()


def coerce_to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    elif isinstance(value, str):
        val = value.strip().lower()
        if val in {"on", "true", "1", "yes", "y"}:
            return True
        elif val in {"off", "false", "0", "no", "n"}:
            return False
    raise ValueError(f"Cannot coerce {value!r} to bool")


class LayeredMixin:
    """Build a dataclass from layers of settings, earlier layers taking precedence."""

    def __init__(self, *layers: Mapping[str, Any]):
        names = {f.name for f in fields(self.__class__)}  # type: ignore[arg-type]
        self._layers = [{k: v for k, v in layer.items() if k in names} for layer in layers]

        merged: dict[str, Any] = {}
        for f in fields(self.__class__):  # type: ignore[arg-type]
            if f.default is not MISSING:
                merged[f.name] = f.default
        for layer in reversed(self._layers):
            merged.update(layer)
        super().__init__(**merged)

    def is_set(self, name: str) -> bool:
        return any(name in layer for layer in self._layers)


@dataclass
class BaseConfig:
    encoding: str = "utf-8"
    report_malformed: bool = False
    log_level: LogLevel | None = None

    def __post_init__(self):
        self.report_malformed = coerce_to_bool(self.report_malformed)
        self.log_level = coerce_log_level(self.log_level) if self.log_level is not None else None


class Config(LayeredMixin, BaseConfig):
    """
    BaseConfig assembled from the environment, configuration files and defaults,
    in that order of precedence. Mixins should be inherited first.
    """


def config_file_paths(env: Mapping[str, str] | None = None) -> list[Path]:
    if env is None:
        env = os.environ

    if config_path := env.get(f"{ENV_PREFIX}CONFIG"):
        return [Path(config_path)]
    return [conf_dir / "iniread.conf" for conf_dir in DEFAULT_CONFIG_DIRS]


def load_file_config(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read the [iniread] section of every existing config file; later files win."""
    config: dict[str, Any] = {}
    for path in config_file_paths(env):
        if not path.is_file():
            continue
        document = load(path)
        if document is None:
            continue
        with document:
            for name in ("encoding", "log_level"):
                result = read_str(document, CONFIG_SECTION, name)
                if result.status is Status.FOUND:
                    config[name] = result.value
            result = read_bool(document, CONFIG_SECTION, "report_malformed")
            if result.status is Status.FOUND:
                config["report_malformed"] = result.value
    return config


def load_env_config(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    if env is None:
        env = os.environ

    config: dict[str, Any] = {}
    for k, v in env.items():
        if not k.startswith(ENV_PREFIX) or k == f"{ENV_PREFIX}CONFIG":
            continue
        config[k[len(ENV_PREFIX) :].lower()] = v

    if "report_malformed" in config:
        config["report_malformed"] = coerce_to_bool(config["report_malformed"])
    return config


def default_config(env: Mapping[str, str] | None = None) -> Config:
    """Returns a Config object with all layers initialized."""
    return Config(load_env_config(env), load_file_config(env))

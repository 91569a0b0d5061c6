import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"
CONFIG_ENV = "KSUID40_CONFIG"


class CliConfig:
    __slots__ = ("count", "format", "template", "timezone")

    def __init__(self, count=1, format="string", template="", timezone="local"):
        self.count = count
        self.format = format
        self.template = template
        self.timezone = timezone


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="WARN", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("cli", "logging")

    def __init__(self, cli=None, logging=None):
        self.cli = cli or CliConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            CliConfig(**d.get("cli", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    env_path = os.environ.get(CONFIG_ENV)
    config_path = Path(path or env_path or _DEFAULT_CONFIG)

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))

import os
import json
import logging
import warnings

from appdirs import AppDirs

from .errors import ConfigError, CalculatorWarning
from .parser import GRAMMAR_MODES, CLASSIC, MAX_DEPTH, MAX_DEPTH_LIMIT

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


class Settings:
    """
    计算器设置。
    :param mode: 文法模式，"classic" 或 "conventional"。
    :param max_depth: 最大嵌套深度（1 到 MAX_DEPTH_LIMIT）。
    :param max_length: 表达式最大长度，None 表示不限制。
    :param precision: 显示结果时的有效数字位数。
    """

    def __init__(self, mode=CLASSIC, max_depth=MAX_DEPTH, max_length=None, precision=10):
        if mode not in GRAMMAR_MODES:
            raise ConfigError(f"Unknown grammar mode {mode!r}, expected one of {', '.join(GRAMMAR_MODES)}")
        if not _is_int(max_depth) or not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ConfigError(f"max_depth must be an integer between 1 and {MAX_DEPTH_LIMIT}, got {max_depth!r}")
        if max_length is not None and (not _is_int(max_length) or max_length < 1):
            raise ConfigError(f"max_length must be a positive integer or null, got {max_length!r}")
        if not _is_int(precision) or precision < 1:
            raise ConfigError(f"precision must be a positive integer, got {precision!r}")
        self.mode = mode
        self.max_depth = max_depth
        self.max_length = max_length
        self.precision = precision

    FIELDS = ("mode", "max_depth", "max_length", "precision")

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError("Settings must be a JSON object")
        for key in sorted(set(data) - set(cls.FIELDS)):
            warnings.warn(f"Unknown setting {key!r} is ignored", CalculatorWarning, stacklevel=3)
        return cls(**{key: data[key] for key in cls.FIELDS if key in data})

    def replace(self, **changes):
        """返回一份修改了部分字段的新设置，值为 None 的字段保持不变"""
        values = self.to_dict()
        values.update({key: value for key, value in changes.items() if value is not None})
        return Settings(**values)

    def to_dict(self):
        return {key: getattr(self, key) for key in self.FIELDS}

    def __repr__(self):
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"Settings({fields})"

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return self.to_dict() == other.to_dict()


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def default_settings_path():
    return os.path.join(AppDirs("calcly").user_config_dir, SETTINGS_FILE)


def load_settings(path=None):
    """
    读取 JSON 设置文件。
    未指定 path 时使用用户配置目录下的 settings.json，该文件不存在时返回默认设置；
    显式指定的文件不存在则报错。
    """
    explicit = path is not None
    if path is None:
        path = default_settings_path()
    if not os.path.exists(path):
        if explicit:
            raise ConfigError(f"Settings file {path!r} does not exist")
        logger.debug("no settings file at %s, using defaults", path)
        return Settings()

    logger.debug("loading settings from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read settings file {path!r}: {e}") from e
    return Settings.from_dict(data)

"""
설정 로더 - default_config.yaml, 사용자 config.yaml, GEMBROWSER_* 환경 변수 순으로 적용
"""
import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"
USER_CONFIG_PATH = Path("~/.config/gembrowser/config.yaml").expanduser()

# 환경 변수 -> 설정 경로
ENV_MAPPINGS = {
    'GEMBROWSER_HOME': ('general', 'home'),
    'GEMBROWSER_SEARCH': ('general', 'search'),
    'GEMBROWSER_MAX_WIDTH': ('general', 'max_width'),
    'GEMBROWSER_DOWNLOADS': ('general', 'downloads'),
    'GEMBROWSER_BOOKMARKS': ('general', 'bookmarks'),
    'GEMBROWSER_CACHE_MAX_PAGES': ('cache', 'max_pages'),
    'GEMBROWSER_CACHE_MAX_SIZE': ('cache', 'max_size'),
    'GEMBROWSER_CACHE_TIMEOUT': ('cache', 'timeout'),
    'GEMBROWSER_TIMEOUT': ('network', 'timeout'),
    'GEMBROWSER_MAX_REDIRECTS': ('network', 'max_redirects'),
    'GEMBROWSER_WORKERS': ('network', 'workers'),
    'GEMBROWSER_LOG_LEVEL': ('logging', 'level'),
    'GEMBROWSER_LOG_FILE': ('logging', 'file'),
    'GEMBROWSER_PROFILING': ('profiling', 'enabled'),
    'GEMBROWSER_TRACE_FILE': ('profiling', 'trace_file'),
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file {path}: {e}")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _convert_env_value(value: str):
    """환경 변수 문자열을 적절한 타입으로 변환"""
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


class Config:
    """YAML 설정 + 환경 변수 오버라이드"""

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        self.config_path = Path(config_path).expanduser() if config_path else USER_CONFIG_PATH
        self.environ = os.environ if environ is None else environ
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(_read_yaml(DEFAULT_CONFIG_PATH))
        if self.config_path.exists():
            _merge(config, _read_yaml(self.config_path))
        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_var, config_path in ENV_MAPPINGS.items():
            env_value = self.environ.get(env_var)
            if env_value is None:
                continue
            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = _convert_env_value(env_value)
        return config

    def get(self, *keys, default=None):
        """중첩 키로 설정값 조회 - config.get('general', 'home')"""
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def path(self, *keys) -> Optional[Path]:
        value = self.get(*keys)
        if not value:
            return None
        return Path(value).expanduser()

    @property
    def home(self) -> str:
        return self.get('general', 'home')

    @property
    def search(self) -> str:
        return self.get('general', 'search')

    @property
    def max_width(self) -> int:
        return int(self.get('general', 'max_width', default=100))

from .settings import Config, DEFAULT_CONFIG_PATH

__all__ = ['Config', 'DEFAULT_CONFIG_PATH']

import pytest

from gembrowser.config import Config


@pytest.fixture
def missing(tmp_path):
    return tmp_path / "none.yaml"


def test_defaults(missing):
    config = Config(config_path=missing, environ={})

    assert config.home == "gemini://gemini.circumlunar.space/"
    assert config.search == "gemini://geminispace.info/search"
    assert config.max_width == 100
    assert config.get("network", "max_redirects") == 5
    assert config.get("profiling", "enabled") is False


def test_unknown_key_returns_default(missing):
    config = Config(config_path=missing, environ={})
    assert config.get("general", "nope") is None
    assert config.get("nope", "deeper", default=3) == 3


def test_user_file_merges_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("general:\n  home: gemini://mine.example/\ncache:\n  max_pages: 5\n")
    config = Config(config_path=path, environ={})

    assert config.home == "gemini://mine.example/"
    assert config.get("cache", "max_pages") == 5
    # 지정하지 않은 키는 기본값 유지
    assert config.search == "gemini://geminispace.info/search"
    assert config.get("cache", "timeout") == 1800


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("general: [unclosed\n")
    with pytest.raises(ValueError):
        Config(config_path=path, environ={})


def test_env_overrides(missing):
    config = Config(config_path=missing, environ={
        "GEMBROWSER_HOME": "gemini://env.example/",
        "GEMBROWSER_MAX_WIDTH": "72",
        "GEMBROWSER_CACHE_TIMEOUT": "0.5",
        "GEMBROWSER_PROFILING": "TRUE",
    })

    assert config.home == "gemini://env.example/"
    assert config.max_width == 72
    assert config.get("cache", "timeout") == 0.5
    assert config.get("profiling", "enabled") is True


def test_path_expands_user(missing, monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    config = Config(config_path=missing, environ={"GEMBROWSER_DOWNLOADS": "~/dl"})
    assert config.path("general", "downloads") == tmp_path / "dl"


def test_path_empty_is_none(missing):
    config = Config(config_path=missing, environ={"GEMBROWSER_LOG_FILE": ""})
    assert config.path("logging", "file") is None

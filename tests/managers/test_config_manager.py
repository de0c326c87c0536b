from managers.config_manager import ConfigManager
from models.config import DEFAULT_CHANNEL_NAME


def test_bundled_config_loads():
    config = ConfigManager()
    config.load()

    assert config.playback.channel_name == DEFAULT_CHANNEL_NAME
    assert config.playback.default_duration_ms == 500
    assert config.presenter.keys.advance == ["RIGHT", "SPACE"]
    assert config.api.enabled


def test_includes_are_merged(tmp_path):
    (tmp_path / "playback.yaml").write_text("playback:\n  channel_name: room-42\n  default_duration_ms: 250\n")
    (tmp_path / "presenter.yaml").write_text("presenter:\n  keys:\n    advance: [n]\n")
    main = tmp_path / "config.yaml"
    main.write_text("include:\n  - playback.yaml\n  - presenter.yaml\n")

    config = ConfigManager(config_path=str(main))
    config.load()

    assert config.playback.channel_name == "room-42"
    assert config.playback.default_duration_ms == 250
    assert config.presenter.keys.advance == ["n"]
    # Unlisted bindings and sections keep defaults
    assert config.presenter.keys.back == ["LEFT"]
    assert config.api.port == 8000


def test_monolithic_config(tmp_path):
    main = tmp_path / "config.yaml"
    main.write_text("api:\n  enabled: false\n  port: 9001\n")

    config = ConfigManager(config_path=str(main))
    config.load()

    assert not config.api.enabled
    assert config.api.port == 9001


def test_missing_include_falls_back_to_factory_defaults(tmp_path):
    main = tmp_path / "config.yaml"
    main.write_text("include:\n  - nope.yaml\n")

    config = ConfigManager(config_path=str(main))
    config.load()

    assert config.api.host == "127.0.0.1"
    assert not config.api.enabled


def test_invalid_section_keeps_defaults(tmp_path):
    main = tmp_path / "config.yaml"
    main.write_text("playback:\n  default_duration_ms: soon\n")

    config = ConfigManager(config_path=str(main))
    config.load()

    assert config.playback.default_duration_ms == 500

from circulation_desk.config import Settings, settings


def test_log_level_follows_debug_when_unset():
    assert Settings(debug=True, log_level="").log_level == "DEBUG"
    assert Settings(debug=False, log_level="").log_level == "WARNING"


def test_explicit_log_level_wins():
    assert Settings(debug=True, log_level="INFO").log_level == "INFO"


def test_module_settings_resolve_a_level():
    assert settings.log_level

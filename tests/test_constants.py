from twitch_chat.constants import _get_env_bool, _get_env_float, _get_env_int


def test_get_env_int_valid_positive_integer(monkeypatch):
    """Test parsing a valid positive integer from environment variable."""
    monkeypatch.setenv("TEST_VAR", "123")
    assert _get_env_int("TEST_VAR", 999) == 123


def test_get_env_int_invalid_string(monkeypatch, capsys):
    """Test handling of invalid string value in environment variable."""
    monkeypatch.setenv("TEST_VAR", "abc")
    assert _get_env_int("TEST_VAR", 999) == 999
    assert "Invalid integer value for TEST_VAR" in capsys.readouterr().out


def test_get_env_int_float_string(monkeypatch):
    """Test handling of float string value in environment variable."""
    monkeypatch.setenv("TEST_VAR", "3.14")
    assert _get_env_int("TEST_VAR", 999) == 999


def test_get_env_int_unset(monkeypatch):
    monkeypatch.delenv("TEST_VAR", raising=False)
    assert _get_env_int("TEST_VAR", 60) == 60


def test_get_env_float_valid(monkeypatch):
    monkeypatch.setenv("TEST_VAR", "1.75")
    assert _get_env_float("TEST_VAR", 0.0) == 1.75


def test_get_env_float_accepts_integer_text(monkeypatch):
    monkeypatch.setenv("TEST_VAR", "2")
    assert _get_env_float("TEST_VAR", 0.0) == 2.0


def test_get_env_float_invalid(monkeypatch, capsys):
    monkeypatch.setenv("TEST_VAR", "fast")
    assert _get_env_float("TEST_VAR", 1.75) == 1.75
    assert "Invalid float value for TEST_VAR" in capsys.readouterr().out


def test_get_env_bool_truthy_values(monkeypatch):
    for value in ("true", "1", "YES", " True "):
        monkeypatch.setenv("TEST_VAR", value)
        assert _get_env_bool("TEST_VAR", False) is True


def test_get_env_bool_falsy_values(monkeypatch):
    for value in ("false", "0", "no", "whatever"):
        monkeypatch.setenv("TEST_VAR", value)
        assert _get_env_bool("TEST_VAR", True) is False


def test_get_env_bool_unset_uses_default(monkeypatch):
    monkeypatch.delenv("TEST_VAR", raising=False)
    assert _get_env_bool("TEST_VAR", True) is True

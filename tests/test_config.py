"""Tests for linecfg settings loading."""

from linecfg.config import Settings, format_settings, load_settings


def test_default_settings_when_no_file(linecfg_home):
    """When no settings.toml exists, all defaults are applied."""
    settings = load_settings()
    assert settings.default_separator == ": "
    assert settings.default_newline == "\n"
    assert settings.comment_marker == "#"
    assert settings.immediate_save is False
    assert settings.quiet is False


def test_load_valid_settings(settings_file):
    """Valid TOML file is parsed correctly."""
    settings_file(
        '[format]\n'
        'separator = " = "\n'
        'newline = "crlf"\n'
        'comment = ";"\n'
        '\n'
        '[store]\n'
        'immediate_save = true\n'
        '\n'
        '[output]\n'
        'quiet = true\n'
    )
    settings = load_settings()
    assert settings.default_separator == " = "
    assert settings.default_newline == "\r\n"
    assert settings.comment_marker == ";"
    assert settings.immediate_save is True
    assert settings.quiet is True


def test_partial_settings_use_defaults(settings_file):
    """Settings with only some keys use defaults for the rest."""
    settings_file('[format]\nnewline = "cr"\n')
    settings = load_settings()
    assert settings.default_newline == "\r"
    assert settings.default_separator == ": "  # default
    assert settings.quiet is False             # section missing entirely


def test_empty_settings_file(settings_file):
    """Empty settings.toml uses all defaults."""
    settings_file("")
    assert load_settings() == Settings()


def test_malformed_settings_fall_back(settings_file, capsys):
    """Malformed TOML falls back to defaults with a warning."""
    settings_file("[invalid\nthis is not toml at all {{{}}")
    settings = load_settings()
    assert settings == Settings()
    assert "Could not parse" in capsys.readouterr().err


def test_invalid_separator_uses_default(settings_file, capsys):
    """A separator that is not ':', '=' or whitespace is rejected."""
    settings_file('[format]\nseparator = " -> "\n')
    settings = load_settings()
    assert settings.default_separator == ": "
    assert "separator" in capsys.readouterr().err


def test_whitespace_separator_allowed(settings_file):
    settings_file('[format]\nseparator = "\\t"\n')
    assert load_settings().default_separator == "\t"


def test_invalid_newline_uses_default(settings_file, capsys):
    settings_file('[format]\nnewline = "windows"\n')
    settings = load_settings()
    assert settings.default_newline == "\n"
    assert "newline" in capsys.readouterr().err


def test_newline_name_case_insensitive(settings_file):
    settings_file('[format]\nnewline = "CRLF"\n')
    assert load_settings().default_newline == "\r\n"


def test_invalid_comment_marker_uses_default(settings_file, capsys):
    settings_file('[format]\ncomment = ":"\n')
    settings = load_settings()
    assert settings.comment_marker == "#"
    assert "comment" in capsys.readouterr().err


def test_non_string_value_uses_default(settings_file, capsys):
    settings_file('[format]\nseparator = 5\n')
    assert load_settings().default_separator == ": "
    assert "must be a string" in capsys.readouterr().err


def test_boolean_string_coercion(settings_file):
    """String 'true'/'false' coerced to bool."""
    settings_file('[store]\nimmediate_save = "yes"\n[output]\nquiet = "false"\n')
    settings = load_settings()
    assert settings.immediate_save is True
    assert settings.quiet is False


def test_cli_overrides():
    """Settings.with_overrides() replaces specified fields."""
    settings = Settings()
    overridden = settings.with_overrides(quiet=True, immediate_save=True)
    assert overridden.quiet is True
    assert overridden.immediate_save is True
    # Original unchanged (frozen dataclass)
    assert settings.quiet is False


def test_cli_overrides_skip_none():
    """with_overrides() ignores None values (unset CLI flags)."""
    settings = Settings(quiet=True)
    assert settings.with_overrides(quiet=None) is settings


def test_explicit_settings_path(tmp_path):
    """load_settings() accepts an explicit path."""
    custom = tmp_path / "custom.toml"
    custom.write_text('[store]\nimmediate_save = true\n', encoding="utf-8")
    assert load_settings(settings_path=custom).immediate_save is True


def test_settings_display(linecfg_home):
    """format_settings produces readable output."""
    output = format_settings(Settings(default_newline="\r\n"))
    assert "Settings file:" in output
    assert "exists: no" in output
    assert "[format]" in output
    assert "separator = ': '" in output
    assert "newline = crlf" in output
    assert "immediate_save = false" in output

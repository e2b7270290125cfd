from pathlib import Path

import pytest

from eml.config import CFG_FILE, ConfigFile, LintConfig, build_config, load_config, parse_config
from eml.errors import ConfigError, EMLUserError
from eml.rules.entry_paths import DEFAULT_EXTENSIONS
from tests.infrastructure import write


def _cfg(root: Path, text: str) -> Path:
    return write(root / CFG_FILE, text)


def test_defaults_without_config_file(tmp_path):
    cfg = load_config(tmp_path)
    assert isinstance(cfg, LintConfig)
    assert cfg.source is None
    assert cfg.policy.top_level_alias == "@"
    assert cfg.policy.extensions == DEFAULT_EXTENSIONS
    assert cfg.lint_extensions == (".ts", ".tsx", ".js", ".jsx", ".mts", ".cts", ".mjs", ".cjs")
    assert cfg.gitignore is True
    assert cfg.exclude == ()
    assert cfg.rules == {"no-invalid-entry-imports": "error"}


def test_empty_config_file_means_defaults(tmp_path):
    _cfg(tmp_path, "")
    cfg = load_config(tmp_path)
    assert cfg.source == (tmp_path / CFG_FILE).resolve()
    assert cfg.rules == {"no-invalid-entry-imports": "error"}


def test_full_config(tmp_path):
    _cfg(tmp_path, """
top_level_alias: "~"
extensions: [".ts", ".vue"]
lint_extensions: [".ts", ".tsx"]
exclude:
  - "**/*.d.ts"
  - "generated/"
gitignore: false
rules:
  no-invalid-entry-imports: warn
""")
    cfg = load_config(tmp_path)
    assert cfg.policy.top_level_prefix == "~/"
    assert cfg.policy.extensions == (".ts", ".vue")
    assert cfg.lint_extensions == (".ts", ".tsx")
    assert cfg.exclude == ("**/*.d.ts", "generated/")
    assert cfg.gitignore is False
    assert cfg.rules == {"no-invalid-entry-imports": "warn"}
    assert cfg.enabled_rules() == {"no-invalid-entry-imports": "warn"}


def test_default_lint_extensions_follow_extensions(tmp_path):
    _cfg(tmp_path, "extensions: ['.ts']\n")
    cfg = load_config(tmp_path)
    assert cfg.lint_extensions == (".ts", ".mts", ".cts", ".mjs", ".cjs")


def test_rule_turned_off(tmp_path):
    _cfg(tmp_path, "rules:\n  no-invalid-entry-imports: 'off'\n")
    cfg = load_config(tmp_path)
    assert cfg.rules == {"no-invalid-entry-imports": "off"}
    assert cfg.enabled_rules() == {}


def test_extends_then_rules_override(tmp_path):
    _cfg(tmp_path, """
extends: [recommended]
rules:
  no-invalid-entry-imports: warn
""")
    assert load_config(tmp_path).rules == {"no-invalid-entry-imports": "warn"}


def test_extends_as_string(tmp_path):
    _cfg(tmp_path, "extends: recommended\n")
    assert load_config(tmp_path).rules == {"no-invalid-entry-imports": "error"}


def test_unknown_key_reports_path(tmp_path):
    _cfg(tmp_path, "top_level_alias: '@'\nextensionz: ['.ts']\n")
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path)
    assert "extensionz" in str(ei.value)
    assert CFG_FILE in str(ei.value)


def test_invalid_severity_reports_field_path(tmp_path):
    _cfg(tmp_path, "rules:\n  no-invalid-entry-imports: fatal\n")
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path)
    assert "$.rules.no-invalid-entry-imports" in str(ei.value)


def test_wrong_type_reports_field_path(tmp_path):
    _cfg(tmp_path, "gitignore: 'sometimes'\n")
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path)
    assert "$.gitignore" in str(ei.value)


def test_unknown_rule_is_user_error(tmp_path):
    _cfg(tmp_path, "rules:\n  no-such-rule: error\n")
    with pytest.raises(EMLUserError) as ei:
        load_config(tmp_path)
    assert "no-such-rule" in str(ei.value)


def test_unknown_preset_is_user_error(tmp_path):
    _cfg(tmp_path, "extends: strict\n")
    with pytest.raises(EMLUserError) as ei:
        load_config(tmp_path)
    assert "strict" in str(ei.value)


@pytest.mark.parametrize("alias", ["", "src/app", "./x", "."])
def test_invalid_alias(tmp_path, alias):
    _cfg(tmp_path, f"top_level_alias: '{alias}'\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize("ext", ["ts", ".", "*.ts"])
def test_invalid_extension(tmp_path, ext):
    _cfg(tmp_path, f"extensions: ['{ext}']\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_lint_extension_without_parser(tmp_path):
    _cfg(tmp_path, "lint_extensions: ['.ts', '.vue']\n")
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path)
    assert ".vue" in str(ei.value)


def test_yaml_must_be_mapping(tmp_path):
    _cfg(tmp_path, "- a\n- b\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_broken_yaml(tmp_path):
    _cfg(tmp_path, "rules: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_explicit_config_path(tmp_path):
    write(tmp_path / "conf" / "lint.yaml", "top_level_alias: '#app'\n")
    cfg = load_config(tmp_path, Path("conf/lint.yaml"))
    assert cfg.policy.top_level_prefix == "#app/"


def test_explicit_config_must_exist(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path, Path("missing.yaml"))


def test_cli_overrides_win(tmp_path):
    _cfg(tmp_path, "top_level_alias: '~'\ngitignore: true\n")
    cfg = load_config(tmp_path, alias="$lib", gitignore=False)
    assert cfg.policy.top_level_alias == "$lib"
    assert cfg.gitignore is False


def test_parse_and_build_directly():
    cf = parse_config({"extends": ["recommended"], "exclude": ["dist/"]})
    assert isinstance(cf, ConfigFile)
    assert cf.extends == ["recommended"]
    cfg = build_config(cf)
    assert cfg.exclude == ("dist/",)
    assert cfg.rules == {"no-invalid-entry-imports": "error"}

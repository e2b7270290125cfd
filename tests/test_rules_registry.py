import pytest

from eml.rules import (
    PathPolicy,
    get_preset,
    get_rule_class,
    list_presets,
    list_rules,
)
from eml.rules.base import BaseRule
from eml.rules.entry_imports import EntryImportsRule
from eml.rules.registry import UnknownPresetError, UnknownRuleError
from eml.types import ImportSource


def test_builtin_rule_registered_and_resolved():
    assert list_rules() == ["no-invalid-entry-imports"]
    cls = get_rule_class("no-invalid-entry-imports")
    assert cls is EntryImportsRule
    assert issubclass(cls, BaseRule)


def test_unknown_rule():
    with pytest.raises(UnknownRuleError) as ei:
        get_rule_class("no-such-rule")
    assert "no-invalid-entry-imports" in str(ei.value)


def test_recommended_preset():
    assert "recommended" in list_presets()
    assert get_preset("recommended") == {"no-invalid-entry-imports": "error"}


def test_preset_is_a_copy():
    get_preset("recommended")["no-invalid-entry-imports"] = "off"
    assert get_preset("recommended") == {"no-invalid-entry-imports": "error"}


def test_unknown_preset():
    with pytest.raises(UnknownPresetError):
        get_preset("strict")


def test_rule_meta():
    meta = EntryImportsRule.meta
    assert meta.name == "no-invalid-entry-imports"
    assert meta.type == "problem"
    assert meta.recommended is True
    assert set(meta.messages) == {
        "invalidTopLevelImport",
        "invalidTopLevelImportDepth",
        "invalidTopLevelImportChildren",
        "invalidParentImport",
        "tooManyDirectorySegments",
        "invalidSubdirectoryImport",
    }


def test_messages_follow_policy():
    msgs = EntryImportsRule(PathPolicy(top_level_alias="~", extensions=(".ts",))).messages()
    assert "~/module-name/entry.<OPTIONAL-SEGMENTS>.ts" in msgs["invalidTopLevelImport"]
    assert "{" not in "".join(msgs.values())

    default = EntryImportsRule().messages()
    assert "@/module-name/entry.<OPTIONAL-SEGMENTS>[.ts|.tsx|.js|.jsx]" in default["invalidTopLevelImport"]


def test_check_allowed_import():
    assert EntryImportsRule().check(ImportSource("@/ui/entry.core")) is None


def test_check_violation():
    src = ImportSource("../entry", line=3, column=7, end_line=3, end_column=17)
    hit = EntryImportsRule().check(src)
    assert hit is not None
    assert hit.message_id == "invalidParentImport"
    assert hit.source is src
    assert hit.message.startswith('Imports starting with ".."')

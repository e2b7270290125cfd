from pathlib import Path

import pytest

from eml.config import ConfigFile, build_config
from eml.discovery import discover_files
from eml.errors import TargetNotFoundError
from eml.git import GitIgnoreService
from tests.infrastructure import write, write_tree


def _cfg(**kw):
    return build_config(ConfigFile(**kw))


def test_project_walk_respects_gitignore_and_node_modules(tmpproj):
    files = discover_files(tmpproj, _cfg())
    assert files == [
        "src/app/helpers.ts",
        "src/app/page.ts",
        "src/ui/entry..children.ts",
        "src/ui/entry.ts",
        "src/ui/widgets/Card.tsx",
    ]


def test_without_gitignore_dist_is_included(tmpproj):
    files = discover_files(tmpproj, _cfg(gitignore=False))
    assert "dist/bundle.js" in files
    # node_modules отсекается всегда
    assert not any(f.startswith("node_modules/") for f in files)


def test_exclude_patterns(tmpproj):
    files = discover_files(tmpproj, _cfg(exclude=["widgets/", "**/helpers.ts"]))
    assert files == [
        "src/app/page.ts",
        "src/ui/entry..children.ts",
        "src/ui/entry.ts",
    ]


def test_directory_target(tmpproj):
    files = discover_files(tmpproj, _cfg(), [Path("src/ui")])
    assert files == [
        "src/ui/entry..children.ts",
        "src/ui/entry.ts",
        "src/ui/widgets/Card.tsx",
    ]


def test_explicit_file_overrides_gitignore(tmpproj):
    assert discover_files(tmpproj, _cfg(), [Path("dist/bundle.js")]) == ["dist/bundle.js"]


def test_explicit_file_still_honours_exclude(tmpproj):
    cfg = _cfg(exclude=["dist/"])
    assert discover_files(tmpproj, cfg, [Path("dist/bundle.js")]) == []


def test_explicit_non_lintable_file_is_skipped(tmpproj):
    assert discover_files(tmpproj, _cfg(), [Path("src/ui/README.md")]) == []


def test_overlapping_targets_are_deduplicated(tmpproj):
    files = discover_files(tmpproj, _cfg(), [Path("src/ui"), Path("src/ui/entry.ts"), Path("src/ui/widgets")])
    assert files == [
        "src/ui/entry..children.ts",
        "src/ui/entry.ts",
        "src/ui/widgets/Card.tsx",
    ]


def test_missing_target(tmpproj):
    with pytest.raises(TargetNotFoundError):
        discover_files(tmpproj, _cfg(), [Path("src/nope")])


def test_lint_extensions_filter(tmpproj):
    files = discover_files(tmpproj, _cfg(lint_extensions=[".tsx"]))
    assert files == ["src/ui/widgets/Card.tsx"]


def test_nested_gitignore(tmp_path):
    write_tree(tmp_path, {
        "pkg/.gitignore": "generated/\n*.gen.ts\n",
        "pkg/generated/a.ts": "",
        "pkg/b.gen.ts": "",
        "pkg/c.ts": "",
        "other/b.gen.ts": "",
    })
    assert discover_files(tmp_path, _cfg()) == ["other/b.gen.ts", "pkg/c.ts"]


def test_gitignore_service_directory_checks(tmp_path):
    write(tmp_path / ".gitignore", "build/\n# comment\n\n*.log\n")
    write(tmp_path / ".git" / "info" / "exclude", "secret.ts\n")
    svc = GitIgnoreService(tmp_path)
    assert svc.is_dir_ignored("build")
    assert svc.is_ignored("build/x.ts")
    assert svc.is_ignored("logs/run.log")
    assert svc.is_ignored("secret.ts")
    assert not svc.is_ignored("src/app.ts")
    assert not svc.is_dir_ignored("src")

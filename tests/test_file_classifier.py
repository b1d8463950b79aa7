"""
Tests for the file classifier.

Tests cover:
- Each tier rule in isolation
- Rule precedence (first match wins)
- Case-insensitive matching
- Stable ordering within a tier
"""

import pytest
from conftest import make_file

from readme_generator.domain.entities import PriorityTier
from readme_generator.services.file_classifier import (
    classify,
    is_priority_file,
    is_relevant_file,
    sort_by_priority,
)


class TestClassifyTiers:
    """One representative path per tier."""

    @pytest.mark.parametrize(
        ("path", "tier"),
        [
            ("README.md", PriorityTier.README),
            ("LICENSE", PriorityTier.LICENSE),
            ("package.json", PriorityTier.MANIFEST),
            ("src/utils/strings.ts", PriorityTier.SOURCE_DIR),
            ("bin/app_runner.py", PriorityTier.ENTRY_HINT),
            ("scripts/deploy.sh", PriorityTier.SOURCE),
            ("docs/snippets/example.py", PriorityTier.DOCS_SOURCE),
            ("assets/logo.png", PriorityTier.OTHER),
        ],
    )
    def test_representative_paths(self, path: str, tier: PriorityTier) -> None:
        assert classify(make_file(path)) == tier

    @pytest.mark.parametrize(
        "path",
        [
            "README",
            "readme.rst",
            "docs/README.md",
            "packages/core/Readme.markdown",
            "tests/fixtures/README.txt",
        ],
    )
    def test_readme_wins_regardless_of_path(self, path: str) -> None:
        assert classify(make_file(path)) == PriorityTier.README

    def test_readme_with_unknown_suffix_is_not_readme(self) -> None:
        assert classify(make_file("README.html")) != PriorityTier.README

    @pytest.mark.parametrize("path", ["COPYING", "license.md", "LICENSE.txt", "lib/LICENSE"])
    def test_license_names(self, path: str) -> None:
        assert classify(make_file(path)) == PriorityTier.LICENSE

    @pytest.mark.parametrize(
        "path",
        ["Dockerfile", "docker-compose.yaml", "Makefile", "go.mod", "Cargo.lock", "app/pom.xml"],
    )
    def test_manifest_names(self, path: str) -> None:
        assert classify(make_file(path)) == PriorityTier.MANIFEST


class TestClassifyPrecedence:
    """Rule order resolves files that match several rules."""

    def test_source_dir_beats_entry_hint(self) -> None:
        assert classify(make_file("src/main.py")) == PriorityTier.SOURCE_DIR

    def test_entry_hint_applies_inside_test_dir(self) -> None:
        # The test-directory exclusion only guards the generic source tier.
        assert classify(make_file("tests/test_app.py")) == PriorityTier.ENTRY_HINT

    def test_plain_test_file_falls_to_other(self) -> None:
        assert classify(make_file("tests/test_utils.py")) == PriorityTier.OTHER

    def test_entry_hint_beats_docs_source(self) -> None:
        assert classify(make_file("docs/config.js")) == PriorityTier.ENTRY_HINT

    def test_source_dir_must_be_a_path_prefix(self) -> None:
        assert classify(make_file("packages/src/util.ts")) == PriorityTier.SOURCE

    def test_case_insensitive(self) -> None:
        assert classify(make_file("SRC/Util.TS")) == PriorityTier.SOURCE_DIR
        assert classify(make_file("PACKAGE.JSON")) == PriorityTier.MANIFEST

    def test_non_source_in_docs_dir_is_other(self) -> None:
        assert classify(make_file("docs/guide.md")) == PriorityTier.OTHER


class TestClassifyProperties:
    """Totality, determinism and stable sorting."""

    PATHS = [
        "", "a", ".gitignore", "src/", "x.y.z", "very/deep/nested/path/file.go",
        "README.md", "docs/index.html", "e2e/login.spec.ts",
    ]

    def test_total_and_deterministic(self) -> None:
        for path in self.PATHS:
            entry = make_file(path)
            first = classify(entry)
            assert first in set(PriorityTier)
            assert classify(entry) == first

    def test_sort_is_stable_within_tier(self) -> None:
        entries = [
            make_file("scripts/b.sh"),
            make_file("README.md"),
            make_file("scripts/a.sh"),
            make_file("tools/c.py"),
        ]
        ordered = [e.path for e in sort_by_priority(entries)]
        assert ordered == ["README.md", "scripts/b.sh", "scripts/a.sh", "tools/c.py"]


class TestPriorityHelpers:
    """is_priority_file / is_relevant_file."""

    def test_priority_files(self) -> None:
        assert is_priority_file(make_file("README.md"))
        assert is_priority_file(make_file("LICENSE"))
        assert is_priority_file(make_file("yarn.lock"))
        assert not is_priority_file(make_file("src/index.ts"))

    def test_relevant_files(self) -> None:
        assert is_relevant_file(make_file("src/index.ts"))
        assert is_relevant_file(make_file("Makefile"))
        assert not is_relevant_file(make_file("assets/logo.png"))

"""
Tests cho core.ignore_engine - Exclusion patterns cho discovery.

Kiem tra cac truong hop:
- build_ignore_patterns: VCS dirs, excluded dirs, user patterns, gitignore
- build_pathspec: PathSpec creation va caching
- read_gitignore: Doc .gitignore, .git/info/exclude
- clear_cache: Xoa tat ca cache
"""

from pathlib import Path

from core.constants import EXCLUDED_DIRECTORIES, VCS_DIRS
from core.ignore_engine import (
    build_ignore_patterns,
    build_pathspec,
    clear_cache,
    read_gitignore,
)


class TestBuildIgnorePatterns:
    """Test suite cho build_ignore_patterns."""

    def setup_method(self):
        clear_cache()

    def test_vcs_dirs_luon_co_mat(self, tmp_path: Path):
        """VCS directories (.git, .hg, .svn) luon co trong patterns."""
        patterns = build_ignore_patterns(tmp_path)
        for vcs_dir in VCS_DIRS:
            assert f"{vcs_dir}/" in patterns

    def test_excluded_directories_luon_co_mat(self, tmp_path: Path):
        patterns = build_ignore_patterns(tmp_path)
        for name in EXCLUDED_DIRECTORIES:
            assert f"{name}/" in patterns

    def test_chi_co_builtin_khi_khong_co_gi_them(self, tmp_path: Path):
        patterns = build_ignore_patterns(tmp_path)
        assert len(patterns) == len(VCS_DIRS) + len(EXCLUDED_DIRECTORIES)

    def test_user_patterns_duoc_them(self, tmp_path: Path):
        user_patterns = ["*.log", "temp/"]
        patterns = build_ignore_patterns(tmp_path, excluded_patterns=user_patterns)
        for p in user_patterns:
            assert p in patterns

    def test_gitignore_bi_bo_qua_mac_dinh(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("secret.py\n")
        patterns = build_ignore_patterns(tmp_path)
        assert "secret.py" not in patterns

    def test_gitignore_patterns_duoc_them(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("*.pyc\n__pycache__/\n")
        patterns = build_ignore_patterns(tmp_path, use_gitignore=True)
        assert "*.pyc" in patterns
        assert "__pycache__/" in patterns

    def test_thu_tu_uu_tien(self, tmp_path: Path):
        """Thu tu: VCS > Excluded dirs > User > Gitignore."""
        (tmp_path / ".gitignore").write_text("from_gitignore\n")
        patterns = build_ignore_patterns(
            tmp_path, excluded_patterns=["from_user"], use_gitignore=True
        )
        assert patterns.index(".git/") < patterns.index("node_modules/")
        assert patterns.index("node_modules/") < patterns.index("from_user")
        assert patterns.index("from_user") < patterns.index("from_gitignore")


class TestBuildPathspec:
    """Test build_pathspec va cache."""

    def setup_method(self):
        clear_cache()

    def test_match_directory_segment(self, tmp_path: Path):
        spec = build_pathspec(tmp_path)
        assert spec.match_file("node_modules/")
        assert spec.match_file("a/b/node_modules/")
        assert spec.match_file("dist/bundle.js")

    def test_khong_match_file_trung_ten(self, tmp_path: Path):
        """Pattern "build/" chi match folder."""
        spec = build_pathspec(tmp_path)
        assert not spec.match_file("build")
        assert not spec.match_file("src/main.py")

    def test_cache_reuse(self, tmp_path: Path):
        first = build_pathspec(tmp_path, excluded_patterns=["*.log"])
        second = build_pathspec(tmp_path, excluded_patterns=["*.log"])
        assert first is second

    def test_khac_patterns_khac_spec(self, tmp_path: Path):
        first = build_pathspec(tmp_path, excluded_patterns=["*.log"])
        second = build_pathspec(tmp_path, excluded_patterns=["*.tmp"])
        assert first is not second
        assert second.match_file("a.tmp")
        assert not second.match_file("a.log")


class TestReadGitignore:
    """Test read_gitignore."""

    def setup_method(self):
        clear_cache()

    def test_khong_co_gitignore(self, tmp_path: Path):
        assert read_gitignore(tmp_path) == []

    def test_doc_gitignore_va_info_exclude(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("a.py\n")
        exclude = tmp_path / ".git" / "info" / "exclude"
        exclude.parent.mkdir(parents=True)
        exclude.write_text("b.py\n")

        patterns = read_gitignore(tmp_path)

        assert "a.py" in patterns
        assert "b.py" in patterns

    def test_tra_ve_copy(self, tmp_path: Path):
        """Sua list tra ve khong lam hong cache."""
        (tmp_path / ".gitignore").write_text("a.py\n")
        first = read_gitignore(tmp_path)
        first.append("mutated")
        assert "mutated" not in read_gitignore(tmp_path)

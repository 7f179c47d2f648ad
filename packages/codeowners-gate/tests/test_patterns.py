import pytest

from codeowners_gate.requirements.patterns import codeowners_path_to_glob, compile_glob


def _matches(token: str, path: str) -> bool:
    return compile_glob(codeowners_path_to_glob(token)).matches(path)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("*", "**"),
        ("/build/logs/", "build/logs/**"),
        ("apps/", "**/apps/**"),
        ("docs/*", "**/docs/*"),
        ("*.js", "**/*.js"),
        ("/dir1/file.txt", "dir1/file.txt"),
    ],
)
def test_codeowners_path_to_glob(token: str, expected: str) -> None:
    assert codeowners_path_to_glob(token) == expected


def test_star_matches_every_path() -> None:
    for path in ["anyfile", "subdir/file.txt", ".github/workflows/ci.yml", "a/b/c/d"]:
        assert _matches("*", path)
    assert not _matches("*", "")


def test_extension_matches_anywhere_in_the_tree() -> None:
    assert not _matches("*.js", "hi")
    assert not _matches("*.js", "hi.txt")
    assert _matches("*.js", "hi.js")
    assert _matches("*.js", "subdir/hi.js")


def test_anchored_directory_matches_everything_beneath_it() -> None:
    assert not _matches("/build/logs/", "build")
    assert _matches("/build/logs/", "build/logs/")
    assert _matches("/build/logs/", "build/logs/x.txt")
    assert _matches("/build/logs/", "build/logs/sub/y.js")
    assert not _matches("/build/logs/", "other/build/logs/x")


def test_trailing_star_matches_one_level_only() -> None:
    assert _matches("docs/*", "a/docs/file.txt")
    assert _matches("docs/*", "docs/sub/")
    assert not _matches("docs/*", "docs/sub/file.txt")
    assert not _matches("docs/*", "/docs")
    assert not _matches("docs/*", "/docs/")
    assert _matches("docs/*", "/docs/logs/")
    assert _matches("docs/*", "/nested/docs/file.txt")
    assert not _matches("docs/*", "/docs/logs/subdir/hi.js")


def test_floating_directory_matches_at_any_depth() -> None:
    assert _matches("apps/", "apps")
    assert _matches("apps/", "docs/apps")
    assert _matches("apps/", "docs/apps/")
    assert _matches("apps/", "a/b/c/apps/d.js")
    assert _matches("apps/", "/apps/deep/deep/hi.js")
    assert not _matches("apps/", "/docs")
    assert not _matches("apps/", "docs/file.txt")
    assert not _matches("apps/", "myapps/file.txt")


def test_anchored_file_is_exact() -> None:
    assert _matches("/dir1/file.txt", "dir1/file.txt")
    assert not _matches("/dir1/file.txt", "nested/dir1/file.txt")
    assert not _matches("/dir1/file.txt", "dir1/file.txt.bak")


def test_glob_syntax_inside_segments() -> None:
    assert compile_glob("src/?.py").matches("src/a.py")
    assert not compile_glob("src/?.py").matches("src/ab.py")
    assert compile_glob("src/[ab].py").matches("src/b.py")
    assert not compile_glob("src/[!ab].py").matches("src/a.py")
    assert compile_glob("src/[!ab].py").matches("src/c.py")
    assert compile_glob("src/**/test_*.py").matches("src/test_x.py")
    assert compile_glob("src/**/test_*.py").matches("src/a/b/test_x.py")
    assert not compile_glob("src/**/test_*.py").matches("lib/test_x.py")


def test_dot_files_are_matched() -> None:
    assert compile_glob("**/*.yml").matches(".github/workflows/ci.yml")
    assert compile_glob("**").matches(".env")


def test_regex_metacharacters_are_literal() -> None:
    assert compile_glob("a+b/(c).txt").matches("a+b/(c).txt")
    assert not compile_glob("a+b/(c).txt").matches("aab/c.txt")


def test_escaped_characters_match_literally() -> None:
    assert _matches(r"/docs/\#notes.md", "docs/#notes.md")
    assert not _matches(r"/docs/\#notes.md", "docs/\\#notes.md")
    assert compile_glob(r"src/\*.py").matches("src/*.py")
    assert not compile_glob(r"src/\*.py").matches("src/a.py")


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("src/*.{js,ts}", "src/a.ts", True),
        ("src/*.{js,ts}", "src/a.js", True),
        ("src/*.{js,ts}", "src/a.py", False),
        ("{src,lib}/**", "lib/x/y.py", True),
        ("{src,lib}/**", "docs/x.py", False),
        ("src/{a,b/{c,d}}.py", "src/b/d.py", True),
        ("src/{a}.py", "src/{a}.py", True),
        (r"src/\{a,b}.py", "src/{a,b}.py", True),
        (r"src/\{a,b}.py", "src/a.py", False),
    ],
)
def test_brace_alternation(pattern: str, path: str, expected: bool) -> None:
    assert compile_glob(pattern).matches(path) is expected

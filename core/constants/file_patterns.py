"""
File Patterns Constants
Chua cac constants lien quan den exclusion khi discovery.
"""

# VCS directories luon bi exclude
VCS_DIRS: tuple[str, ...] = (".git", ".hg", ".svn")

# Dependency / output / tooling directories luon bi exclude khi index.
# Match theo path segment o moi do sau (vd: packages/a/node_modules/).
EXCLUDED_DIRECTORIES: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    "out",
    ".github",
    ".vscode-test",
)

# Directory Quick Skip - dung voi os.walk de PRUNE directory TRUOC KHI enter
DIRECTORY_QUICK_SKIP: frozenset[str] = frozenset(VCS_DIRS + EXCLUDED_DIRECTORIES)

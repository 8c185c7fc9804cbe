#!/usr/bin/env python3
import os
import re
import sys
from pathlib import Path
from typing import Tuple

PYPROJECT_VERSION = re.compile(r'^version = "([^"]+)"', re.MULTILINE)
INIT_VERSION = re.compile(r'__version__ = "[^"]+"')
PACKAGE_INIT = Path('iotsig') / '__init__.py'


def bump_version(current: str, bump_type: str) -> str:
    major, minor, patch = map(int, current.split('.'))
    bumps = {
        'major': (major + 1, 0, 0),
        'minor': (major, minor + 1, 0),
        'patch': (major, minor, patch + 1),
    }
    if bump_type not in bumps:
        raise ValueError(f"Invalid bump type: {bump_type}")
    return '.'.join(str(part) for part in bumps[bump_type])


def update_version_files(root: Path, bump_type: str) -> Tuple[str, str]:
    """Rewrite the version in pyproject.toml and the package ``__init__``.

    Returns the (current, new) version pair.
    """
    pyproject = root / 'pyproject.toml'
    content = pyproject.read_text()
    match = PYPROJECT_VERSION.search(content)
    if not match:
        raise ValueError(f"Could not find version in {pyproject}")
    current_version = match.group(1)
    new_version = bump_version(current_version, bump_type)

    pyproject.write_text(PYPROJECT_VERSION.sub(f'version = "{new_version}"', content, count=1))

    package_init = root / PACKAGE_INIT
    package_init.write_text(INIT_VERSION.sub(f'__version__ = "{new_version}"', package_init.read_text()))
    return current_version, new_version


def main():
    if len(sys.argv) != 2:
        print("Usage: bump_version.py <major|minor|patch>", file=sys.stderr)
        sys.exit(1)

    try:
        current_version, new_version = update_version_files(Path.cwd(), sys.argv[1])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # GitHub Actions step outputs
    github_output = os.environ.get('GITHUB_OUTPUT')
    if github_output:
        with open(github_output, 'a') as f:
            f.write(f"current_version={current_version}\n")
            f.write(f"new_version={new_version}\n")
    else:
        print(f"Bumped version: {current_version} -> {new_version}")


if __name__ == '__main__':
    main()

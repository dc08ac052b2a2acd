"""
Safe parser for the .git-manager.env settings file.

Reads KEY=value lines without shell evaluation. Values that look like shell
expansion or command chaining are rejected instead of being passed through
to git.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    r'`',
    r'\$\(',
    r'\$\{',
    r';',
    r'&&',
    r'\|',
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env(text: str, source: str = "<string>") -> dict[str, str]:
    """
    Parse KEY=value text into a dict.

    Blank lines and # comments are skipped; a leading "export " is tolerated.

    Raises:
        ValueError: on a malformed line, an invalid key or a forbidden pattern
    """
    values: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()

        key, sep, value = line.partition('=')
        if not sep:
            raise ValueError(f"{source}:{lineno}: expected KEY=value")
        key = key.strip()
        if not KEY_PATTERN.match(key):
            raise ValueError(f"{source}:{lineno}: invalid key '{key}'")

        value = _unquote(value.strip())
        if any(re.search(p, value) for p in FORBIDDEN_PATTERNS):
            raise ValueError(f"{source}:{lineno}: forbidden pattern in value of {key}")
        values[key] = value
    return values


def load_env(path: Path) -> dict[str, str]:
    """
    Load a settings file.

    Raises:
        FileNotFoundError: if the file doesn't exist
        ValueError: if the content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {path}")
    return parse_env(path.read_text(), source=path.name)

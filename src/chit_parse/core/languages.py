"""Canonical language tags, fence-tag aliases, and file-extension lookup.

// [LAW:one-source-of-truth] Every language name the parser or renderer emits
// is normalized through this module.
"""

from __future__ import annotations

from enum import Enum


class LanguageTag(str, Enum):
    """Languages the detector can name. Fence tags outside this set pass through."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    GO = "go"
    RUST = "rust"
    SQL = "sql"
    CSS = "css"
    HTML = "html"
    JSON = "json"
    BASH = "bash"
    YAML = "yaml"
    TEXT = "text"


DEFAULT_LANGUAGE = LanguageTag.TEXT.value


# Short fence tags people actually type -> canonical name.
LANG_ALIASES: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "yml": "yaml",
    "sh": "bash",
    "zsh": "bash",
    "shell": "bash",
    "kt": "kotlin",
    "rs": "rust",
    "cs": "csharp",
    "md": "markdown",
}


def resolve_language(tag: str | None) -> str:
    """Normalize a fence info tag: lowercase, alias lookup, verbatim fallback.

    An empty or missing tag resolves to ``"text"``.
    """
    raw = (tag or "").lower()
    return LANG_ALIASES.get(raw) or raw or DEFAULT_LANGUAGE


# ─── File extensions ─────────────────────────────────────────────────────────

# Shared files with these extensions open as text in an editor.
EDITOR_COMPATIBLE_EXTENSIONS: frozenset[str] = frozenset({
    "txt", "md", "json", "xml", "yaml", "yml", "csv",
    "js", "ts", "jsx", "tsx", "py", "java", "c", "cpp", "h", "cs", "go",
    "rs", "rb", "php", "html", "css", "scss", "sql",
    "env", "gitignore", "editorconfig", "prettierrc", "eslintrc",
    "sh", "bash", "zsh", "ps1", "bat", "cmd",
})

# Extensions whose language differs from the alias table's answer.
_EXTENSION_LANGUAGES: dict[str, str] = {
    "jsx": "javascript",
    "tsx": "tsx",
    "c": "cpp",
    "h": "cpp",
    "hpp": "cpp",
    "cc": "cpp",
    "scss": "css",
    "htm": "html",
    "bash": "bash",
    "ps1": "powershell",
    "bat": "batch",
    "cmd": "batch",
    "txt": "text",
    "csv": "text",
    "env": "bash",
    "xml": "xml",
    "php": "php",
}

_CANONICAL: frozenset[str] = frozenset(tag.value for tag in LanguageTag)


def _extension(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def is_editor_compatible(filename: str) -> bool:
    """True when a shared file is plain text/source an editor can open."""
    return _extension(filename) in EDITOR_COMPATIBLE_EXTENSIONS


def language_for_filename(filename: str) -> str:
    """Best canonical language tag for a file name, ``"text"`` when unknown."""
    ext = _extension(filename)
    if ext in _EXTENSION_LANGUAGES:
        return _EXTENSION_LANGUAGES[ext]
    if ext in LANG_ALIASES:
        return LANG_ALIASES[ext]
    if ext in _CANONICAL:
        return ext
    return DEFAULT_LANGUAGE

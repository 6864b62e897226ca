"""File kinds — closed extension table with a single fallback."""

from __future__ import annotations

from enum import Enum


class FileKind(str, Enum):
    HTML = "html"
    CSS = "css"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    VUE = "vue"
    PYTHON = "python"
    SCSS = "scss"
    LESS = "less"
    MARKDOWN = "markdown"
    SQL = "sql"
    SHELL = "shell"
    YAML = "yaml"
    JSON = "json"
    XML = "xml"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    CSHARP = "csharp"
    PHP = "php"
    RUBY = "ruby"
    GO = "go"
    RUST = "rust"
    DOCKERFILE = "dockerfile"
    INI = "ini"
    PLAIN_TEXT = "text"


EXTENSION_KINDS: dict[str, FileKind] = {
    "html": FileKind.HTML,
    "htm": FileKind.HTML,
    "css": FileKind.CSS,
    "js": FileKind.JAVASCRIPT,
    "mjs": FileKind.JAVASCRIPT,
    "ts": FileKind.TYPESCRIPT,
    "tsx": FileKind.JSX,
    "jsx": FileKind.JSX,
    "vue": FileKind.VUE,
    "py": FileKind.PYTHON,
    "scss": FileKind.SCSS,
    "sass": FileKind.SCSS,
    "less": FileKind.LESS,
    "md": FileKind.MARKDOWN,
    "markdown": FileKind.MARKDOWN,
    "sql": FileKind.SQL,
    "sh": FileKind.SHELL,
    "bash": FileKind.SHELL,
    "zsh": FileKind.SHELL,
    "yml": FileKind.YAML,
    "yaml": FileKind.YAML,
    "json": FileKind.JSON,
    "xml": FileKind.XML,
    "svg": FileKind.XML,
    "java": FileKind.JAVA,
    "cpp": FileKind.CPP,
    "cc": FileKind.CPP,
    "cxx": FileKind.CPP,
    "c++": FileKind.CPP,
    "c": FileKind.C,
    "h": FileKind.C,
    "cs": FileKind.CSHARP,
    "php": FileKind.PHP,
    "rb": FileKind.RUBY,
    "go": FileKind.GO,
    "rs": FileKind.RUST,
    "dockerfile": FileKind.DOCKERFILE,
    "ini": FileKind.INI,
    "cfg": FileKind.INI,
    "conf": FileKind.INI,
}


def extension_of(name: str) -> str:
    """Lower-cased text after the last dot of the basename ('' if none)."""
    base = name.rsplit("/", 1)[-1]
    if "." not in base:
        # A bare "Dockerfile" still maps through the table
        return base.lower()
    return base.rsplit(".", 1)[-1].lower()


def kind_for_name(name: str) -> FileKind:
    return EXTENSION_KINDS.get(extension_of(name), FileKind.PLAIN_TEXT)


def parse_kind(value: str | None, name: str) -> FileKind:
    """Restore a persisted kind, re-deriving it from ``name`` if unknown."""
    try:
        return FileKind(value)
    except ValueError:
        return kind_for_name(name)

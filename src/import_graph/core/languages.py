from dataclasses import dataclass
from pathlib import PurePosixPath

_EXTENSION_LANGUAGE_MAP = {
    ".asp": "asp",
    ".astro": "astro",
    ".bash": "shell",
    ".c": "c",
    ".cc": "cpp",
    ".cjs": "javascript",
    ".cpp": "cpp",
    ".css": "css",
    ".cts": "typescript",
    ".cxx": "cpp",
    ".dart": "dart",
    ".go": "go",
    ".gradle": "groovy",
    ".groovy": "groovy",
    ".h": "c",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".htm": "html",
    ".html": "html",
    ".hxx": "cpp",
    ".java": "java",
    ".js": "javascript",
    ".json": "json",
    ".jsp": "jsp",
    ".jspf": "jsp",
    ".jsx": "javascript",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".less": "less",
    ".lua": "lua",
    ".m": "objc",
    ".md": "markdown",
    ".mjs": "javascript",
    ".mm": "objc",
    ".mts": "typescript",
    ".php": "php",
    ".pl": "perl",
    ".pm": "perl",
    ".py": "python",
    ".pyi": "python",
    ".rb": "ruby",
    ".rs": "rust",
    ".sass": "scss",
    ".scala": "scala",
    ".scss": "scss",
    ".sh": "shell",
    ".shtml": "asp",
    ".svelte": "svelte",
    ".toml": "toml",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".vue": "vue",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".zsh": "shell",
}

# Tried after a language's own family when guessing the file behind an
# extensionless reference.
GENERAL_EXTENSIONS: tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".css",
    ".scss",
    ".py",
    ".dart",
    ".mjs",
    ".cjs",
    ".vue",
    ".svelte",
    ".sass",
    ".less",
    ".rs",
    ".go",
    ".h",
    ".hpp",
    ".c",
    ".cpp",
    ".java",
    ".kt",
    ".php",
    ".rb",
    ".lua",
    ".sh",
    ".html",
    ".json",
)

_SCRIPT_FAMILY = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts", ".json", ".vue", ".svelte")
_STYLE_FAMILY = (".css", ".scss", ".sass", ".less")
_NATIVE_FAMILY = (".h", ".hpp", ".hh", ".c", ".cpp", ".cc", ".m", ".mm")


@dataclass(frozen=True)
class LanguageProfile:
    """How references written in one language map onto files.

    ``module_separator`` is set for languages whose imports name modules
    (``a.b.c``, ``a::b::c``) rather than paths. ``member_imports`` marks
    languages where the last dotted segment may name a symbol inside the
    module, so the parent module is tried as well.
    """

    name: str
    extensions: tuple[str, ...]
    module_separator: str | None = None
    index_names: tuple[str, ...] = ("index",)
    member_imports: bool = False
    partial_prefix: str | None = None

    @property
    def candidate_extensions(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(self.extensions + GENERAL_EXTENSIONS))


_PROFILES: dict[str, LanguageProfile] = {
    profile.name: profile
    for profile in (
        LanguageProfile("javascript", _SCRIPT_FAMILY),
        LanguageProfile("typescript", _SCRIPT_FAMILY),
        LanguageProfile("tsx", _SCRIPT_FAMILY),
        LanguageProfile("vue", _SCRIPT_FAMILY),
        LanguageProfile("svelte", _SCRIPT_FAMILY),
        LanguageProfile("astro", (".astro",) + _SCRIPT_FAMILY),
        LanguageProfile("css", _STYLE_FAMILY, partial_prefix="_"),
        LanguageProfile("scss", (".scss", ".sass", ".css"), partial_prefix="_"),
        LanguageProfile("less", (".less", ".css")),
        LanguageProfile("python", (".py", ".pyi"), module_separator=".", index_names=("__init__",)),
        LanguageProfile("dart", (".dart",)),
        LanguageProfile("rust", (".rs",), module_separator="::", index_names=("mod",), member_imports=True),
        LanguageProfile("go", (".go",)),
        LanguageProfile("c", _NATIVE_FAMILY),
        LanguageProfile("cpp", _NATIVE_FAMILY),
        LanguageProfile("objc", _NATIVE_FAMILY),
        LanguageProfile("java", (".java",), module_separator=".", member_imports=True),
        LanguageProfile("kotlin", (".kt", ".kts", ".java"), module_separator=".", member_imports=True),
        LanguageProfile("scala", (".scala", ".java"), module_separator=".", member_imports=True),
        LanguageProfile("groovy", (".groovy", ".java"), module_separator=".", member_imports=True),
        LanguageProfile("perl", (".pm", ".pl"), module_separator="::"),
        LanguageProfile("lua", (".lua",), module_separator=".", index_names=("init",)),
        LanguageProfile("php", (".php", ".inc")),
        LanguageProfile("ruby", (".rb",)),
        LanguageProfile("shell", (".sh", ".bash", ".zsh")),
        LanguageProfile("html", (".html", ".htm", ".js", ".css")),
        LanguageProfile("asp", (".asp", ".inc", ".shtml", ".html")),
        LanguageProfile("jsp", (".jsp", ".jspf", ".html")),
    )
}

DEFAULT_PROFILE = LanguageProfile("generic", GENERAL_EXTENSIONS)


def normalize_extension(extension: str) -> str:
    """Return ``extension`` lower-cased with exactly one leading dot."""
    stripped = extension.strip().lower().lstrip(".")
    return f".{stripped}" if stripped else ""


def extension_of(name: str) -> str:
    """Extension of a file name, taken after the last dot (``""`` when absent)."""
    if "." not in name.strip("."):
        return ""
    return normalize_extension(name.rsplit(".", 1)[-1])


def language_for_path(file_path: PurePosixPath | str) -> str | None:
    return _EXTENSION_LANGUAGE_MAP.get(extension_of(PurePosixPath(file_path).name))


def language_profile(language: str | None) -> LanguageProfile:
    if language is None:
        return DEFAULT_PROFILE
    return _PROFILES.get(language, DEFAULT_PROFILE)

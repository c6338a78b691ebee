# codesurfer/languages.py
"""
Static table of the languages the playground can run.

Each entry maps the id used by the editor to the Piston runtime name/version and
to the file name a program of that language is written to.
"""

from dataclasses import dataclass
from typing import Dict, List

from codesurfer.errors import UnsupportedLanguage


@dataclass(frozen=True)
class LanguageDescriptor:
    id: str
    display_name: str
    remote_service_id: str
    remote_service_version: str
    file_extension: str
    scratch_filename: str


_LANGUAGES = (
    LanguageDescriptor("javascript", "JavaScript", "javascript", "18.15.0", "js", "main.js"),
    LanguageDescriptor("python", "Python", "python", "3.10.0", "py", "main.py"),
    LanguageDescriptor("java", "Java", "java", "15.0.2", "java", "Main.java"),
    LanguageDescriptor("cpp", "C++", "c++", "10.2.0", "cpp", "program.cpp"),
    LanguageDescriptor("c", "C", "c", "10.2.0", "c", "program.c"),
    LanguageDescriptor("typescript", "TypeScript", "typescript", "5.0.3", "ts", "main.ts"),
    LanguageDescriptor("csharp", "C#", "csharp", "6.12.0", "cs", "Program.cs"),
    LanguageDescriptor("ruby", "Ruby", "ruby", "3.0.1", "rb", "main.rb"),
    LanguageDescriptor("python2", "Python 2", "python", "2.7.18", "py", "main.py"),
    LanguageDescriptor("go", "Go", "go", "1.16.2", "go", "main.go"),
    LanguageDescriptor("rust", "Rust", "rust", "1.68.2", "rs", "main.rs"),
    LanguageDescriptor("php", "PHP", "php", "8.2.3", "php", "main.php"),
    LanguageDescriptor("swift", "Swift", "swift", "5.3.3", "swift", "main.swift"),
    LanguageDescriptor("kotlin", "Kotlin", "kotlin", "1.8.20", "kt", "Main.kt"),
)

LANGUAGES: Dict[str, LanguageDescriptor] = {lang.id: lang for lang in _LANGUAGES}

# Languages evaluated by the JavaScript harness instead of a compiler service.
BROWSER_NATIVE = frozenset({"javascript", "typescript"})


def _normalize(language_id: str) -> str:
    return (language_id or "").strip().lower()


def resolve(language_id: str) -> LanguageDescriptor:
    """
    Look up a language by editor id. Raises UnsupportedLanguage for unknown ids.
    """
    try:
        return LANGUAGES[_normalize(language_id)]
    except KeyError:
        raise UnsupportedLanguage(language_id) from None


def is_browser_native(language_id: str) -> bool:
    return _normalize(language_id) in BROWSER_NATIVE


def supported_languages() -> List[LanguageDescriptor]:
    return list(_LANGUAGES)

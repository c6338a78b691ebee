# codesurfer/preprocess.py
"""
Source transforms applied before a program is handed to a runtime.

These are textual rewrites, not parsers:
- Java snippets are made to compile as a `Main` class (Piston and the local
  runner both expect Main.java).
- TypeScript executed without a compiler gets its simple type annotations
  stripped so it runs as JavaScript. Nested generics and multiline union types
  are not handled.
"""

import re

_JAVA_PUBLIC_CLASS = re.compile(r"public\s+class\s+(\w+)")

_JAVA_MAIN_WRAPPER = """public class Main {{
    public static void main(String[] args) {{
{body}
    }}
}}"""

_TS_INTERFACE = re.compile(r"^[ \t]*(?:export\s+)?interface\s+\w+[^{]*\{[^}]*\}[ \t]*;?[ \t]*\n?", re.MULTILINE)
_TS_TYPE_ALIAS = re.compile(r"^[ \t]*(?:export\s+)?type\s+\w+[^=\n]*=[^;]*;[ \t]*\n?", re.MULTILINE)
_TS_BASIC_ANNOTATION = re.compile(r":\s*(?:string|number|boolean|any|void|Date|RegExp)\s*([,=;)])")
_TS_FUNCTION_RETURN = re.compile(r"function\s+\w+\([^)]*\):\s*\w+\s*{")
_TS_RETURN_ANNOTATION = re.compile(r":\s*\w+\s*{")
_TS_GENERIC = re.compile(r"<[^>]+>")


def wrap_java(source_code: str) -> str:
    match = _JAVA_PUBLIC_CLASS.search(source_code)
    if match is None:
        return _JAVA_MAIN_WRAPPER.format(body=source_code)
    if match.group(1) == "Main":
        return source_code
    return source_code[:match.start()] + "public class Main" + source_code[match.end():]


def strip_type_annotations(source_code: str) -> str:
    code = _TS_INTERFACE.sub("", source_code)
    code = _TS_TYPE_ALIAS.sub("", code)
    code = _TS_BASIC_ANNOTATION.sub(r"\1", code)
    code = _TS_FUNCTION_RETURN.sub(lambda m: _TS_RETURN_ANNOTATION.sub(" {", m.group(0)), code)
    return _TS_GENERIC.sub("", code)


def preprocess(source_code: str, language_id: str, strip_types: bool = False) -> str:
    """
    Return the source to execute for `language_id`.

    `strip_types` only matters for TypeScript and should be set by paths that
    run it as plain JavaScript.
    """
    language = (language_id or "").strip().lower()
    if language == "java":
        return wrap_java(source_code)
    if language == "typescript" and strip_types:
        return strip_type_annotations(source_code)
    return source_code

# sandbox/harness.py
"""
Node.js harness that evaluates a JavaScript program the way the playground's
browser console does: console.log is captured into a buffer for the duration of
the evaluation and always restored afterwards.

The report is written from the process 'exit' hook, so it survives a program
that calls process.exit() part way through. It is exactly one line starting
with _RESULT_MARKER, followed by a JSON report:
{"output": str, "error": str|null, "restored": bool, "exitCode": int}.
"""

import json
from typing import Dict, Optional

# Unique marker used to identify the JSON report (must be unlikely to collide)
_RESULT_MARKER = "<<<__CODESURFER_RESULT__>>>"

INPUT_HINT = "// Input functions available: readline() and prompt()\n"


def build_harness(source_code: str, stdin: str = "") -> str:
    input_lines = json.dumps(stdin.split("\n")) if stdin else "null"
    return f"""// coding: utf-8
const __source = {json.dumps(source_code)};
const __inputLines = {input_lines};
const __originalLog = console.log;
let __output = '';
let __error = null;

const __restore = () => {{
  console.log = __originalLog;
  if (__inputLines !== null) {{
    delete globalThis.readline;
    delete globalThis.prompt;
  }}
}};

process.once('exit', (code) => {{
  __restore();
  process.stdout.write({json.dumps(_RESULT_MARKER)} + JSON.stringify({{
    output: __output,
    error: __error,
    restored: console.log === __originalLog,
    exitCode: code,
  }}) + '\\n');
}});

console.log = (...args) => {{
  __output += args.join(' ') + '\\n';
}};

if (__inputLines !== null) {{
  let __lineIndex = 0;
  const __nextLine = () => (__lineIndex < __inputLines.length ? __inputLines[__lineIndex++] : '');
  globalThis.readline = __nextLine;
  globalThis.prompt = __nextLine;
  __output += {json.dumps(INPUT_HINT)};
}}

try {{
  new Function(__source)();
}} catch (e) {{
  __error = e instanceof Error ? e.message : String(e);
}} finally {{
  __restore();
}}
"""


def parse_report(stdout: str) -> Optional[Dict]:
    """
    Return the harness report from process stdout, or None when the harness
    never got to print it (e.g. node was killed by a signal).
    """
    report = None
    for line in (stdout or "").splitlines():
        if line.startswith(_RESULT_MARKER):
            report = line[len(_RESULT_MARKER):]
    if report is None:
        return None
    try:
        parsed = json.loads(report)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None

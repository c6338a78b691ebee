# codesurfer/config.py
"""
Runtime configuration for the execution API.

Every setting comes from the environment so the same image can run against the
public Piston instance, a self-hosted one, or no remote service at all (local
toolchains only).
"""

import os

# Remote execution service. An empty value disables the remote path entirely.
PISTON_URL = os.environ.get("PISTON_URL", "https://emkc.org/api/v2/piston/execute")
PISTON_REQUEST_TIMEOUT = int(os.environ.get("PISTON_REQUEST_TIMEOUT", "15"))

# When the remote service is unreachable, run the request once on local toolchains.
LOCAL_FALLBACK = os.environ.get("CODESURFER_LOCAL_FALLBACK", "").strip().lower() in ("1", "true", "yes")

MAX_CODE_SIZE = int(os.environ.get("CODESURFER_MAX_CODE_SIZE", str(200 * 1024)))  # 200 KB

LOG_LEVEL = os.environ.get("CODESURFER_LOG_LEVEL", "INFO").upper()

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8081"))

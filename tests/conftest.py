"""Root conftest — sets env vars BEFORE any linkspan module is imported.

The config.py module-level singleton reads LINKSPAN_* variables and .env
files at import time, so these must be pinned before pytest discovers any
test that transitively imports linkspan.
"""

import os
import tempfile

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["LINKSPAN_DIR"] = tempfile.mkdtemp(prefix="linkspan-test-")
os.environ["LINKSPAN_LOG_LEVEL"] = "INFO"
for _var in ("LINKSPAN_CLIPBOARD_COMMAND", "LINKSPAN_BROWSER", "LINKSPAN_LOCAL_DOMAINS"):
    os.environ.pop(_var, None)

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


# Load environment variables from a local .env file (lightweight, no python-dotenv dependency)
def load_env_file(env_path: Path) -> List[str]:
    """Set variables from ``env_path``; returns the names that were set.

    Existing non-empty variables are preserved. Unreadable files are logged and skipped.
    """
    loaded: List[str] = []
    if not env_path.exists():
        return loaded
    try:
        text = env_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.warning('Could not read %s: %s', env_path, e)
        return loaded
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k.startswith('export '):
            k = k[len('export '):].strip()
        v = v.strip().strip('"').strip("'")
        if not k:
            continue
        existing = os.environ.get(k)
        if existing is None or existing.strip() == '':
            os.environ[k] = v
            loaded.append(k)
    return loaded

"""Serverless entrypoint for SnapCaption.

The platform imports ``app`` from this file directly, without installing the
package, so ``src`` is put on the import path first. Settings come from the
deployment's environment variables (Supabase, OpenAI and ``ENVIRONMENT``).
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from snap_caption.api.asgi import app  # noqa: E402

__all__ = ["app"]

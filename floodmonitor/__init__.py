"""Sri Lanka flood monitor.

Sub-packages
------------
floodmonitor.backend
    FastAPI server (api/), domain logic (core/), schemas/, services/, cli/
client/
    React map dashboard, built separately and served from ``static.dir``
    (not a Python package)
"""

from __future__ import annotations

__version__ = "0.1.0"

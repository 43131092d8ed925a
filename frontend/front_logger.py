from __future__ import annotations

"""
frontend/front_logger.py

Logger mínimo para el front:
- No depende del server.
- Solo escribe si FRONT_DEBUG=True (Streamlit no necesita spam en stdout).
"""

from frontend.config_front_base import FRONT_DEBUG


def log_warning(msg: str) -> None:
    if FRONT_DEBUG:
        print(f"[front][warning] {msg}")


def log_info(msg: str) -> None:
    if FRONT_DEBUG:
        print(f"[front] {msg}")

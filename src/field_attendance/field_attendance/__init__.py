"""Field attendance backend.

Organized by feature modules (attendance, distance, roster, users) with a thin
Flask controller layer over service/repository layers.
"""
from __future__ import annotations

from .container import Container, build_container, wire_services

__all__ = ["Container", "build_container", "wire_services"]

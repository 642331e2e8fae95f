"""
Report output: derived listings and the rich-rendered report.
"""

from __future__ import annotations

from .listings import ListingSettings
from .report import render_report

__all__ = ["ListingSettings", "render_report"]

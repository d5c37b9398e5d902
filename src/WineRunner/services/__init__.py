"""Process execution services for WineRunner."""

from __future__ import annotations

from WineRunner.services.process import ProcessRunner

__all__ = ["ProcessRunner"]

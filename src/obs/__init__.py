"""Observability for the git source extractor."""

from __future__ import annotations

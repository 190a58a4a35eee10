"""Template engine adapters."""

from __future__ import annotations

from .jinja import JinjaNamespace, JinjaTemplateEngine

__all__ = ["JinjaNamespace", "JinjaTemplateEngine"]

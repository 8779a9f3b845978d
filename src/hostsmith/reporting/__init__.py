"""Rendering of resolved build plans."""

from .plan import describe_module, plan_to_json, render_text

__all__ = ["describe_module", "plan_to_json", "render_text"]

"""Calendar UI blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint(
    "calendar",
    __name__,
    url_prefix="/calendar",
    template_folder="../../templates",
)

from . import routes  # noqa: E402,F401 - import routes for registration

__all__ = ["bp"]

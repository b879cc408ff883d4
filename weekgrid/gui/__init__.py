"""
Weekgrid view layer

Collaborator interfaces, the Qt week view presenter and a text renderer.
"""

from .week_view import WeekViewPresenter
from .text_view import render_week_text

__all__ = ['WeekViewPresenter', 'render_week_text']

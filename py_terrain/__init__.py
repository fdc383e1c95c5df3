"""
py-terrain: seeded isometric landscapes from a year of daily activity.
"""

from .landscape import Landscape, LandscapeGenerator, LandscapeOptions, generate_landscape
from .models import ContributionCalendar, ContributionDay, ContributionWeek

__version__ = "0.1.0"

__all__ = ['Landscape', 'LandscapeGenerator', 'LandscapeOptions', 'generate_landscape',
           'ContributionCalendar', 'ContributionDay', 'ContributionWeek']

# H5P Score Tracking API
from .score_tracking import app

__all__ = ['app']

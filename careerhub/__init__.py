"""
CareerHub decisioning core.

Applicant qualification scoring, ranking, and the application
lifecycle workflow for the CareerHub platform.
"""

__app_name__ = "CareerHub"
__version__ = "0.1.0"

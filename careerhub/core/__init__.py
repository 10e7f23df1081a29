"""
Core business logic modules for CareerHub.

Submodules:
- exceptions: Error taxonomy shared by every public operation
- matching: Candidate scoring and qualified applicant ranking
- workflow: Application lifecycle, notifications and listings
- services: Wiring of repositories and services
"""

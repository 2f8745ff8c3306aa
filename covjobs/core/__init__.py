"""
Core services for covjobs.

Path resolution, configuration loading and the jobs command service.
"""

"""
Core services — the asset resolution pipeline and its collaborators.
"""

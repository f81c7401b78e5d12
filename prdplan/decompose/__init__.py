"""
PRD decomposition for prdplan.

Segments a PRD, extracts typed requirements, generates a dependency-ordered
task graph from templates, and estimates duration, milestones and risks.

Public entry points are re-exported from the top-level prdplan package.
Nothing is imported here: lib.templates depends on decompose.models.
"""

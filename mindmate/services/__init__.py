"""
Mind Mate services.

Each subpackage holds service classes for one area; routers reach them
through mindmate.dependencies and the pipelines package.
"""

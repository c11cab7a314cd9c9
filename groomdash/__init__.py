"""
Core package for the Fluffy Friends Spa appointment dashboard.

Submodules provide webhook ingestion, record normalization, filtering, and
user interface rendering helpers that are orchestrated by the top-level
`app.py`.
"""

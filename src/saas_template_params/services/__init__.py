"""
saas_template_params.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Translate storage failures into the store's error kinds.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable against a throwaway SQLite file.

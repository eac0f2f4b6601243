"""
saas_template_params.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the ORM schema, engine/session setup, and the parameter repository.
"""

# Package marker.

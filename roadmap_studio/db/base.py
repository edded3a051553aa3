# roadmap_studio/db/base.py

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# IMPORTANT: import all model modules so they register with Base.metadata

from roadmap_studio.db import models  # noqa: F401,E402  (side-effect import)

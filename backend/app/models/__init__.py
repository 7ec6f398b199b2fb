"""Database models package.

Ensure all model classes are imported so SQLAlchemy can register them,
avoiding lazy name resolution issues during mapper configuration.
"""

from app.models.plant import Plant  # noqa: F401
from app.models.profile import Profile  # noqa: F401
from app.models.revision import Revision  # noqa: F401

__all__ = [
	"Plant",
	"Profile",
	"Revision",
]

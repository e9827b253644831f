from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from calendlyx.core.timeutils import local_now
from calendlyx.db.session import Base


class _NamedReference:
    """Columns shared by the name-keyed lists that feed form choices."""

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=local_now)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} name={self.name!r}>"


class ActivityType(_NamedReference, Base):
    __tablename__ = "activity_types"


class Participant(_NamedReference, Base):
    __tablename__ = "participants"


class District(_NamedReference, Base):
    __tablename__ = "districts"

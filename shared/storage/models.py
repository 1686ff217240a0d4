from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.sql import func

from shared.config.database import Base


class StoredObject(Base):
    __tablename__ = "stored_objects"
    # Separate schema keeps the object table apart from anything else in the database
    __table_args__ = {"schema": "storage_schema"}

    key = Column(String(512), primary_key=True)
    content_type = Column(String(128), nullable=False, default="application/octet-stream")
    data = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

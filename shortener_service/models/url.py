from sqlalchemy import Column, String, Text
from shortener_service.database.connection import Base
from shortener_service.services.short_code import SHORT_CODE_LENGTH


class UrlMappingRecord(Base):
    """
    Persisted short code to URL mapping.
    
    Rows are inserted once and never updated or deleted.
    The primary key on short_code is what makes a second insert
    of the same code fail instead of overwriting the first one.
    """
    __tablename__ = "urls"

    short_code = Column(String(SHORT_CODE_LENGTH), primary_key=True)
    original_url = Column(Text, nullable=False)

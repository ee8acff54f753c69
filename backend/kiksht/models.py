from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from kiksht.database import Base
from kiksht.parsing import PartOfSpeech


part_of_speech_enum = Enum(
    *(item.value for item in PartOfSpeech),
    name="part_of_speech_enum",
    native_enum=False,
    create_constraint=True,
)


class DictionaryEntry(Base):
    __tablename__ = "entries"
    __table_args__ = (Index("ix_entries_root", "root", unique=True),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    root: Mapped[str] = mapped_column(String(255), nullable=False)
    part_of_speech: Mapped[str] = mapped_column(part_of_speech_enum, nullable=False)
    definition: Mapped[str] = mapped_column(Text, nullable=False, default="")
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

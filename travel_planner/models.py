from datetime import datetime

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import BigInteger, String, Text, DateTime, JSON, func, ForeignKey
from sqlalchemy.orm import relationship

class Base(DeclarativeBase):
    pass

class MemoryBlob(Base):
    __tablename__ = "memory_blobs"
    name: Mapped[str] = mapped_column(String(128), primary_key=True)

    # JSON-serialized Memory, overwritten on every save
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

class Conversation(Base):
    __tablename__ = "conversations"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # ephemeral search results held between requests (flights, hotels, hotel_pending)
    context: Mapped[dict] = mapped_column(JSON, default=dict)

    messages = relationship("Message", back_populates="conversation", order_by="Message.id")

class Message(Base):
    __tablename__ = "messages"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    conversation_id: Mapped[str] = mapped_column(ForeignKey("conversations.id"), index=True)
    role: Mapped[str] = mapped_column(String(16))  # "user" | "agent"
    content: Mapped[str] = mapped_column(Text)
    ts: Mapped[int] = mapped_column(BigInteger)  # epoch ms
    meta: Mapped[dict] = mapped_column(JSON, default=dict)

    conversation = relationship("Conversation", back_populates="messages")

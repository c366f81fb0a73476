from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from kvsource.db.session import Base


class KeyValueRecord(Base):
    __tablename__ = "kv_records"
    # Insertion sequence; defines the store-listing order.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class QuoteHistoryDB(Base):
	__tablename__ = 'quotes'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	currency: Mapped[str] = mapped_column(String(5), nullable=False)
	source: Mapped[str] = mapped_column(String(255), nullable=False)
	buy_price: Mapped[float] = mapped_column(Float, nullable=False)
	sell_price: Mapped[float] = mapped_column(Float, nullable=False)
	timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

	__table_args__ = (Index('idx_quotes_currency', 'currency'),)


class QuoteCacheMirrorDB(Base):
	__tablename__ = 'quote_cache'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	currency: Mapped[str] = mapped_column(String(5), nullable=False, unique=True)
	data: Mapped[str] = mapped_column(Text, nullable=False)
	timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)

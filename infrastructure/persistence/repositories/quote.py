from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.models.quote import CacheMirrorRecord, PersistedQuoteRecord
from infrastructure.persistence.models.quote import QuoteCacheMirrorDB, QuoteHistoryDB


class QuoteRepository:
	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	def add_quote_record(self, record: PersistedQuoteRecord) -> None:
		self.db_session.add(
			QuoteHistoryDB(
				currency=record.currency,
				source=record.source,
				buy_price=record.buy_price,
				sell_price=record.sell_price,
				timestamp=record.timestamp,
			)
		)

	async def upsert_cache_mirror(self, record: CacheMirrorRecord) -> None:
		result = await self.db_session.execute(
			select(QuoteCacheMirrorDB).filter(QuoteCacheMirrorDB.currency == record.currency)
		)
		existing = result.scalars().first()

		if existing is None:
			self.db_session.add(
				QuoteCacheMirrorDB(
					currency=record.currency, data=record.data, timestamp=record.timestamp
				)
			)
		else:
			existing.data = record.data
			existing.timestamp = record.timestamp

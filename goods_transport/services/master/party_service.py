import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from goods_transport.core.exceptions import InternalError
from goods_transport.models.master.party import Party
from goods_transport.schemas.master.master_schema import PartyCreate

logger = logging.getLogger(__name__)

class PartyService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_party(self, party_data: PartyCreate) -> Party:
        """Register a sender/receiver party"""
        try:
            party = Party(
                name=party_data.name,
                contact_info=party_data.contact_info,
                opening_balance=party_data.opening_balance,
            )
            self.session.add(party)
            await self.session.commit()
            await self.session.refresh(party)

            logger.info(f"Party created successfully with ID: {party.id}")
            return party

        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating party: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create party.")

    async def get_parties(self) -> List[Party]:
        """Newest first"""
        result = await self.session.execute(select(Party).order_by(desc(Party.created_at), desc(Party.id)))
        return list(result.scalars().all())

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from goods_transport.core.exceptions import BaseAppException, ConflictError, InternalError
from goods_transport.models.master.agency import Agency
from goods_transport.schemas.master.master_schema import AgencyCreate

logger = logging.getLogger(__name__)

class AgencyService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_agency(self, agency_data: AgencyCreate) -> Agency:
        """Create a forwarding agency; names are unique (case-sensitive)"""
        try:
            result = await self.session.execute(select(Agency).where(Agency.name == agency_data.name))
            if result.scalar_one_or_none():
                raise ConflictError(f"Agency with name '{agency_data.name}' already exists.")

            agency = Agency(name=agency_data.name)
            self.session.add(agency)
            await self.session.commit()
            await self.session.refresh(agency)

            logger.info(f"Agency created successfully with ID: {agency.id}")
            return agency

        except BaseAppException:
            raise
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"Agency with name '{agency_data.name}' already exists.")
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating agency: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create agency.")

    async def get_agencies(self) -> List[Agency]:
        result = await self.session.execute(select(Agency).order_by(Agency.name))
        return list(result.scalars().all())

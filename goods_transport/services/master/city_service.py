import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from goods_transport.core.exceptions import BaseAppException, ConflictError, InternalError
from goods_transport.models.master.city import City
from goods_transport.schemas.master.master_schema import CityCreate

logger = logging.getLogger(__name__)

class CityService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_city(self, city_data: CityCreate) -> City:
        """Create a city"""
        try:
            result = await self.session.execute(select(City).where(City.name == city_data.name))
            if result.scalar_one_or_none():
                raise ConflictError(f"City '{city_data.name}' already exists.")

            city = City(name=city_data.name)
            self.session.add(city)
            await self.session.commit()
            await self.session.refresh(city)

            logger.info(f"City created successfully with ID: {city.id}")
            return city

        except BaseAppException:
            raise
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"City '{city_data.name}' already exists.")
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating city: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create city.")

    async def get_cities(self) -> List[City]:
        result = await self.session.execute(select(City).order_by(City.name))
        return list(result.scalars().all())

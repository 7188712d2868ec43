from fastapi import APIRouter
from goods_transport.api.v1.endpoints.auth import auth
from goods_transport.api.v1.endpoints.master import agencies, cities, items, parties
from goods_transport.api.v1.endpoints.logistics import deliveries, returns, shipments, trips, vehicles
from goods_transport.api.v1.endpoints.labour import labour
from goods_transport.api.v1.endpoints.reports import reports

api_router = APIRouter()

# Authentication routes
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Master data routes
api_router.include_router(agencies.router, prefix="/agencies", tags=["Master Data"])
api_router.include_router(cities.router, prefix="/cities", tags=["Master Data"])
api_router.include_router(parties.router, prefix="/parties", tags=["Master Data"])
api_router.include_router(items.router, prefix="/items", tags=["Master Data"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["Vehicles"])

# Logistics routes
api_router.include_router(shipments.router, prefix="/shipments", tags=["Shipments"])
api_router.include_router(deliveries.router, prefix="/deliveries", tags=["Deliveries"])
api_router.include_router(trips.router, prefix="/trips", tags=["Trips"])
api_router.include_router(returns.router, prefix="/returns", tags=["Returns"])

# Labour routes
api_router.include_router(labour.persons_router, prefix="/labour-persons", tags=["Labour"])
api_router.include_router(labour.assignments_router, prefix="/labour-assignments", tags=["Labour"])
api_router.include_router(labour.reminders_router, prefix="/labour-reminders", tags=["Labour"])
api_router.include_router(labour.settlements_router, prefix="/labour-settlements", tags=["Labour"])

# Report routes
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])

from goods_transport.models.auth.user import User
from goods_transport.models.master.agency import Agency
from goods_transport.models.master.city import City
from goods_transport.models.master.party import Party
from goods_transport.models.master.item_catalog import ItemCatalog
from goods_transport.models.logistics.vehicle import Vehicle
from goods_transport.models.logistics.vehicle_transaction import VehicleTransaction
from goods_transport.models.logistics.trip_log import TripLog
from goods_transport.models.logistics.trip_shipment_log import TripShipmentLog
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.logistics.goods_detail import GoodsDetail
from goods_transport.models.logistics.delivery import Delivery
from goods_transport.models.logistics.party_transaction import PartyTransaction
from goods_transport.models.logistics.return_shipment import ReturnShipment, ReturnItem
from goods_transport.models.labour.labour_person import LabourPerson
from goods_transport.models.labour.labour_assignment import LabourAssignment
from goods_transport.models.labour.labour_payment import LabourPaymentHistory


__all__ = [
    "User",
    "Agency",
    "City",
    "Party",
    "ItemCatalog",
    "Vehicle",
    "VehicleTransaction",
    "TripLog",
    "TripShipmentLog",
    "Shipment",
    "GoodsDetail",
    "Delivery",
    "PartyTransaction",
    "ReturnShipment",
    "ReturnItem",
    "LabourPerson",
    "LabourAssignment",
    "LabourPaymentHistory",
]

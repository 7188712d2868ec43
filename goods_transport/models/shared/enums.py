from enum import Enum

class UserRole(str, Enum):
    OPERATOR = "OPERATOR"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"

class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED_BY_ADMIN = "APPROVED_BY_ADMIN"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

class ApprovalAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"

class DeliveryStatus(str, Enum):
    DELIVERED = "DELIVERED"

class ShipmentPaymentStatus(str, Enum):
    PENDING = "PENDING"
    ALREADY_PAID = "ALREADY_PAID"
    FREE = "FREE"

class PartyType(str, Enum):
    SENDER = "SENDER"
    RECEIVER = "RECEIVER"

class VehicleTransactionType(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"

class FarePaymentStatus(str, Enum):
    PAID = "PAID"
    UNPAID = "UNPAID"
    NOT_AVAILABLE = "N/A"

class LabourAssignmentStatus(str, Enum):
    ASSIGNED = "ASSIGNED"
    DELIVERED = "DELIVERED"
    COLLECTED = "COLLECTED"
    SETTLED = "SETTLED"

class LabourAssignmentAction(str, Enum):
    DELIVER = "DELIVER"
    COLLECT = "COLLECT"
    SETTLE = "SETTLE"

class ReturnStatus(str, Enum):
    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

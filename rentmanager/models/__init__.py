# Import all models so they are registered with Base.metadata
from rentmanager.models.person import Person
from rentmanager.models.user import User, UserRole, UserStatus
from rentmanager.models.property import Property
from rentmanager.models.rental import Rental
from rentmanager.models.pricing import Pricing
from rentmanager.models.bank_account import BankAccount
from rentmanager.models.payment import RentPayment
from rentmanager.models.maintenance import MaintenanceRequest, MaintenanceStatus
from rentmanager.models.contract_signing import ContractSigningRequest, SigningStatus
from rentmanager.models.rental_history import RentalHistory

__all__ = [
    "Person",
    "User",
    "UserRole",
    "UserStatus",
    "Property",
    "Rental",
    "Pricing",
    "BankAccount",
    "RentPayment",
    "MaintenanceRequest",
    "MaintenanceStatus",
    "ContractSigningRequest",
    "SigningStatus",
    "RentalHistory",
]

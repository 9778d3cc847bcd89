"""
Repository layer: one class per table, each bound to a request scoped Session.
"""
from rentmanager.repositories.base import BaseRepository, to_uuid
from rentmanager.repositories.person_repo import PersonRepository
from rentmanager.repositories.user_repo import UserRepository
from rentmanager.repositories.property_repo import PropertyRepository
from rentmanager.repositories.rental_repo import RentalRepository
from rentmanager.repositories.pricing_repo import PricingRepository
from rentmanager.repositories.bank_account_repo import BankAccountRepository
from rentmanager.repositories.payment_repo import PaymentRepository
from rentmanager.repositories.maintenance_repo import MaintenanceRepository
from rentmanager.repositories.contract_signing_repo import ContractSigningRepository
from rentmanager.repositories.rental_history_repo import RentalHistoryRepository

__all__ = [
    "BaseRepository",
    "to_uuid",
    "PersonRepository",
    "UserRepository",
    "PropertyRepository",
    "RentalRepository",
    "PricingRepository",
    "BankAccountRepository",
    "PaymentRepository",
    "MaintenanceRepository",
    "ContractSigningRepository",
    "RentalHistoryRepository",
]

from rentmanager.api.routes.users import router as users_router, public_router as login_router
from rentmanager.api.routes.persons import router as persons_router
from rentmanager.api.routes.properties import router as properties_router, admin_router as admin_properties_router
from rentmanager.api.routes.rentals import router as rentals_router, admin_router as admin_rentals_router
from rentmanager.api.routes.pricing import router as pricing_router
from rentmanager.api.routes.payments import router as payments_router, admin_router as admin_payments_router
from rentmanager.api.routes.bank_accounts import router as bank_accounts_router
from rentmanager.api.routes.maintenance import router as maintenance_router, admin_router as admin_maintenance_router
from rentmanager.api.routes.rental_history import router as rental_history_router, admin_router as admin_rental_history_router
from rentmanager.api.routes.contracts import router as contracts_router
from rentmanager.api.routes.contract_signing import router as contract_signing_router, admin_router as admin_contract_signing_router
from rentmanager.api.routes.emails import router as emails_router
from rentmanager.api.routes.file_upload import (
    router as upload_router,
    public_router as public_upload_router,
    admin_router as admin_file_upload_router,
)
from rentmanager.api.routes.invitations import router as invitations_router
from rentmanager.api.routes.registration import router as registration_router

__all__ = [
    "users_router",
    "login_router",
    "persons_router",
    "properties_router",
    "admin_properties_router",
    "rentals_router",
    "admin_rentals_router",
    "pricing_router",
    "payments_router",
    "admin_payments_router",
    "bank_accounts_router",
    "maintenance_router",
    "admin_maintenance_router",
    "rental_history_router",
    "admin_rental_history_router",
    "contracts_router",
    "contract_signing_router",
    "admin_contract_signing_router",
    "emails_router",
    "upload_router",
    "public_upload_router",
    "admin_file_upload_router",
    "invitations_router",
    "registration_router",
]

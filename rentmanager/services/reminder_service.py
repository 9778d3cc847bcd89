"""
Renter reminder runs.

Both runs are started as background tasks from HTTP handlers; they open their
own database session and only log failures.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from rentmanager.core.config import settings
from rentmanager.database import SessionLocal
from rentmanager.db.base import as_utc
from rentmanager.models.person import Person
from rentmanager.models.property import Property
from rentmanager.models.rental import Rental
from rentmanager.repositories import (
    PersonRepository,
    PricingRepository,
    PropertyRepository,
    RentalRepository,
    UserRepository,
)
from rentmanager.services import email_service

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(ZoneInfo(settings.REMINDER_TIMEZONE)).date()


def _local_date(value: datetime) -> date:
    return as_utc(value).astimezone(ZoneInfo(settings.REMINDER_TIMEZONE)).date()


def add_one_month(day: date) -> date:
    """Same day next month; overflowing days roll into the following month."""
    year, month = (day.year + 1, 1) if day.month == 12 else (day.year, day.month + 1)
    return date(year, month, 1) + timedelta(days=day.day - 1)


def renewal_window(today: date) -> tuple:
    target = add_one_month(today)
    return target - timedelta(days=2), target + timedelta(days=2)


def _sender_name(persons: PersonRepository, prop: Property) -> str:
    if prop.manager_ids:
        try:
            manager = persons.get(prop.manager_ids[0])
        except ValueError:
            manager = None
        if manager is not None and manager.full_name:
            return manager.full_name
        logger.warning(f"[REMINDER] Could not fetch manager details for property {prop.id}. Using default sender.")
    return settings.DEFAULT_SENDER_NAME


class _RentalContext:
    """Renter, email and property resolved for one rental; None when any is missing"""

    def __init__(self, renter: Person, email: str, prop: Property):
        self.renter = renter
        self.email = email
        self.property = prop

    @classmethod
    def resolve(cls, db: Session, rental: Rental) -> Optional["_RentalContext"]:
        renter = PersonRepository(db).get(rental.renter_id)
        if renter is None or not renter.full_name:
            logger.warning(f"[REMINDER] Renter {rental.renter_id} not found for rental {rental.id}. Skipping.")
            return None
        user = UserRepository(db).get_by_person_id(renter.id)
        if user is None or not user.email:
            logger.warning(f"[REMINDER] User or email missing for renter {renter.id}. Skipping.")
            return None
        prop = PropertyRepository(db).get(rental.property_id)
        if prop is None:
            logger.warning(f"[REMINDER] Property {rental.property_id} not found for rental {rental.id}. Skipping.")
            return None
        return cls(renter, user.email, prop)


def send_annual_renewal_reminders(optional_message: str = "", db: Optional[Session] = None) -> int:
    """
    Email renters whose lease ends roughly one month from today.

    Returns the number of emails sent.
    """
    own_session = db is None
    db = db or SessionLocal()
    try:
        lower, upper = renewal_window(_today())
        logger.info(f"[REMINDER] Annual renewal run, end date window {lower} to {upper}")

        rentals = RentalRepository(db).get_active()
        if not rentals:
            logger.info("[REMINDER] No active rentals found")
            return 0

        persons = PersonRepository(db)
        sent = 0
        for rental in rentals:
            if rental.end_date is None:
                continue
            end = _local_date(rental.end_date)
            if not (lower <= end <= upper):
                continue

            ctx = _RentalContext.resolve(db, rental)
            if ctx is None:
                continue

            if email_service.send_annual_renewal_email(
                ctx.email,
                ctx.renter.full_name,
                ctx.property.address,
                as_utc(rental.end_date),
                _sender_name(persons, ctx.property),
                optional_message,
            ):
                logger.info(f"[REMINDER] Renewal reminder sent to {ctx.email} for {ctx.property.address}")
                sent += 1
            else:
                logger.error(f"[REMINDER] Renewal reminder to {ctx.email} failed")

        logger.info(f"[REMINDER] Annual renewal run finished, {sent} emails sent")
        return sent
    except Exception as e:
        logger.error(f"[REMINDER] Annual renewal run failed: {e}")
        return 0
    finally:
        if own_session:
            db.close()


def notify_all(db: Optional[Session] = None) -> None:
    """
    Monthly invoice on the pricing due day and a lease anniversary note on the
    start date's day and month (in a later year) for every active rental.
    """
    own_session = db is None
    db = db or SessionLocal()
    try:
        today = _today()
        rentals = RentalRepository(db).get_active()
        if not rentals:
            logger.info("[REMINDER] NotifyAll: no active rentals to process")
            return
        logger.info(f"[REMINDER] NotifyAll: processing {len(rentals)} active rentals")

        persons = PersonRepository(db)
        pricing_repo = PricingRepository(db)
        for rental in rentals:
            ctx = _RentalContext.resolve(db, rental)
            if ctx is None:
                continue
            pricing = pricing_repo.get_by_rental(rental.id)
            if pricing is None:
                logger.warning(f"[REMINDER] NotifyAll: no pricing for rental {rental.id}. Skipping.")
                continue

            sender = _sender_name(persons, ctx.property)

            if today.day == pricing.due_day:
                logger.info(f"[REMINDER] Sending monthly invoice to {ctx.email}")
                email_service.send_rent_invoice_email(
                    ctx.email,
                    renter_name=ctx.renter.full_name,
                    renter_nit=ctx.renter.nit,
                    address=ctx.property.address,
                    property_type=ctx.property.type or "",
                    start_date=as_utc(rental.start_date) if rental.start_date else None,
                    end_date=as_utc(rental.end_date) if rental.end_date else None,
                    monthly_rent=pricing.monthly_rent,
                    unpaid_months=rental.unpaid_months or 0,
                    payment_terms=rental.payment_terms or "",
                    sender_name=sender,
                )

            if rental.start_date is not None:
                start = _local_date(rental.start_date)
                if start.day == today.day and start.month == today.month and start.year != today.year:
                    logger.info(f"[REMINDER] Sending lease anniversary note to {ctx.email}")
                    email_service.send_anniversary_email(ctx.email, ctx.renter.full_name, ctx.property.address, sender)
    except Exception as e:
        logger.error(f"[REMINDER] NotifyAll failed: {e}")
    finally:
        if own_session:
            db.close()

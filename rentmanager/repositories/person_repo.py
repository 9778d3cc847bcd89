"""
Data access layer for persons.
"""
import logging
from typing import List

from rentmanager.models.bank_account import BankAccount
from rentmanager.models.person import Person
from rentmanager.models.user import User, UserRole
from rentmanager.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PersonRepository(BaseRepository[Person]):
    model = Person

    def get_by_role(self, role: UserRole) -> List[Person]:
        """Persons whose linked user account has the given role."""
        return (
            self.db.query(Person)
            .join(User, User.person_id == Person.id)
            .filter(User.role == role)
            .all()
        )

    def delete_cascade(self, person: Person) -> None:
        """
        Delete a person together with its user account and bank accounts.

        Everything goes in one transaction; a failure leaves nothing deleted.
        """
        try:
            users = self.db.query(User).filter(User.person_id == person.id).all()
            for user in users:
                logger.info(f"[PERSON] Deleting user {user.id} linked to person {person.id}")
                self.db.delete(user)

            accounts = self.db.query(BankAccount).filter(BankAccount.person_id == person.id).all()
            for account in accounts:
                self.db.delete(account)
            logger.info(f"[PERSON] Deleting {len(accounts)} bank account(s) of person {person.id}")

            self.db.flush()
            self.db.delete(person)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

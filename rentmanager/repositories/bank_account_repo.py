from typing import List

from rentmanager.models.bank_account import BankAccount
from rentmanager.repositories.base import BaseRepository, to_uuid


class BankAccountRepository(BaseRepository[BankAccount]):
    model = BankAccount

    def get_by_person(self, person_id) -> List[BankAccount]:
        return self.db.query(BankAccount).filter(BankAccount.person_id == to_uuid(person_id)).all()

import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_TMP_DIR = tempfile.mkdtemp(prefix="rentmanager-tests-")
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEND_EMAILS"] = "false"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""
os.environ["TSA_URL"] = ""
os.environ["CONTRACTS_DIR"] = os.path.join(_TMP_DIR, "contracts")
os.environ["CERTS_DIR"] = os.path.join(_TMP_DIR, "certs")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import rentmanager.models  # noqa: F401
from rentmanager.core.security import create_access_token, encode_password, get_password_hash
from rentmanager.database import get_db
from rentmanager.db.base import Base
from rentmanager.main import app
from rentmanager.models import BankAccount, Person, Pricing, Property, Rental, User, UserRole, UserStatus
from rentmanager.schemas.file_upload import FileInfo, UploadResponse
from rentmanager.services import email_service, upload_tokens
from rentmanager.services.storage_service import StorageError, build_object_path, get_storage_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeStorage:
    """In-memory stand-in for the Supabase storage service"""

    bucket = "uploads"

    def __init__(self):
        self.objects = {}

    def upload(self, content, filename, content_type, user_id, uploaded_by):
        path = build_object_path(user_id, filename)
        self.objects[path] = content
        return UploadResponse(
            key=os.path.basename(path),
            link=self.get_public_url(path),
            name=filename,
            path=path,
            size=len(content),
            uploaded_by=uploaded_by,
            uploaded_at=datetime.now(timezone.utc).isoformat(),
            bucket_name=self.bucket,
        )

    def download(self, path):
        if path not in self.objects:
            raise StorageError(f"object not found: {path}")
        return self.objects[path]

    def remove(self, path):
        if path not in self.objects:
            raise StorageError(f"object not found: {path}")
        del self.objects[path]

    def download_and_remove(self, path):
        data = self.download(path)
        self.remove(path)
        return data

    def get_public_url(self, path):
        return f"https://storage.test/{self.bucket}/{path}"

    def _info(self, path):
        return FileInfo(name=os.path.basename(path), size=len(self.objects[path]), path=path,
                        download_url=self.get_public_url(path))

    def list_user(self, user_id):
        return [self._info(p) for p in self.objects if p.startswith(f"user_{user_id}/")]

    def list_all(self):
        return [self._info(p) for p in self.objects]


# ==================== Database & client ====================

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(db, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture outgoing mail instead of talking to SMTP"""
    outbox = []

    def fake_deliver(to, msg):
        outbox.append({"to": to, "subject": str(msg["Subject"]), "message": msg})
        return True

    monkeypatch.setattr(email_service, "_deliver", fake_deliver)
    return outbox


@pytest.fixture(autouse=True)
def clear_upload_tokens():
    upload_tokens.upload_tokens.clear()
    yield
    upload_tokens.upload_tokens.clear()


# ==================== Factories ====================

def make_person(db, full_name="Test Person", nit="123456789", phone="3001234567"):
    person = Person(full_name=full_name, nit=nit, phone=phone)
    db.add(person)
    db.commit()
    db.refresh(person)
    return person


def make_user(db, email, role=UserRole.USER, person=None, status=UserStatus.ACTIVE, password=None):
    user = User(
        email=email,
        role=role,
        status=status,
        person_id=person.id if person is not None else None,
        password_hash=get_password_hash(encode_password(password)) if password else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin(db):
    person = make_person(db, "Ana Admin", nit="900100200")
    return make_user(db, "admin@example.com", UserRole.ADMIN, person)


@pytest.fixture
def manager(db):
    person = make_person(db, "Mario Manager", nit="800200300")
    return make_user(db, "manager@example.com", UserRole.MANAGER, person)


@pytest.fixture
def resident(db):
    person = make_person(db, "Rosa Resident", nit="700300400")
    return make_user(db, "resident@example.com", UserRole.RESIDENT, person)


@pytest.fixture
def other_resident(db):
    person = make_person(db, "Omar Other", nit="600400500")
    return make_user(db, "other@example.com", UserRole.RESIDENT, person)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)


@pytest.fixture
def resident_headers(resident):
    return auth_headers(resident)


@pytest.fixture
def managed_property(db, manager, resident):
    prop = Property(
        address="Calle 10 # 20-30",
        city="Bogotá",
        state="Cundinamarca",
        type="apartment",
        resident_id=resident.person_id,
        manager_ids=[str(manager.person_id)],
    )
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop


@pytest.fixture
def other_property(db, admin):
    prop = Property(address="Carrera 7 # 1-2", manager_ids=[str(admin.person_id)])
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop


@pytest.fixture
def rental(db, managed_property, resident):
    now = datetime.now(timezone.utc)
    rental = Rental(
        property_id=managed_property.id,
        renter_id=resident.person_id,
        start_date=now - timedelta(days=90),
        end_date=now + timedelta(days=275),
        payment_terms="monthly",
    )
    db.add(rental)
    db.commit()
    db.refresh(rental)
    return rental


@pytest.fixture
def pricing(db, rental):
    pricing = Pricing(rental_id=rental.id, monthly_rent=1600000, security_deposit=1600000, due_day=5,
                      utilities_included=["water"], tenant_responsible_for=["gas"])
    db.add(pricing)
    db.commit()
    db.refresh(pricing)
    return pricing


@pytest.fixture
def bank_account(db, resident):
    account = BankAccount(person_id=resident.person_id, bank_name="Bancolombia", account_type="savings",
                          account_number="0011223344", account_holder="Rosa Resident")
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def email_text(msg):
    """Decoded text of every text/* part of a captured message"""
    return "".join(
        part.get_payload(decode=True).decode("utf-8")
        for part in msg.walk()
        if part.get_content_maintype() == "text"
    )

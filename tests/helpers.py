import unittest

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from backend.app.core.database import get_session
from backend.app.main import app

PASSWORD = "Secret123"


class ApiTestCase(unittest.TestCase):
    """
    Runs the API against a fresh in-memory database for every test.
    """

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        SQLModel.metadata.create_all(self.engine)

        def get_test_session():
            with Session(self.engine) as session:
                yield session

        app.dependency_overrides[get_session] = get_test_session
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(self, email="ada@example.com", password=PASSWORD, name="Ada Lovelace") -> dict:
        response = self.client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    @staticmethod
    def bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def auth_headers(self, email="ada@example.com") -> dict:
        return self.bearer(self.register(email=email)["accessToken"])

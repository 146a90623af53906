import jwt
import pytest
from sqlalchemy import func, select

from agrimart.api.security import InvalidToken, create_access_token, decode_access_token
from agrimart.data.models import ProductModel, UserModel
from agrimart.data.seed import PRODUCTS, seed
from agrimart.domain.enums import UserRole
from agrimart.services import notification_service
from agrimart.services.notification_service import NotificationService, send_order_placed_task


class TestAccessToken:
    def test_round_trip(self):
        user = decode_access_token(create_access_token(42, UserRole.SELLER))
        assert user.id == 42
        assert user.role == UserRole.SELLER
        assert not user.is_admin

    def test_expired(self):
        token = create_access_token(1, UserRole.BUYER, ttl=-10)
        with pytest.raises(InvalidToken, match="Token expired"):
            decode_access_token(token)

    def test_wrong_signature(self):
        token = jwt.encode({"sub": "1", "role": "admin"}, "another-secret-0123456789abcdefghij", algorithm="HS256")
        with pytest.raises(InvalidToken, match="Invalid token"):
            decode_access_token(token)


class TestNotifications:
    def test_enqueues_task(self, monkeypatch):
        sent = []

        class StubTask:
            @staticmethod
            def delay(*args):
                sent.append(args)

        monkeypatch.setattr(notification_service, "send_order_placed_task", StubTask)
        NotificationService().send_order_placed(3, 17)
        assert sent == [(3, 17)]

    def test_task_body(self):
        assert send_order_placed_task(3, 17) == {"user_id": 3, "order_id": 17, "status": "sent"}


class TestSeed:
    def test_seeds_once(self, db):
        assert seed(db) is True
        assert db.execute(select(func.count()).select_from(ProductModel)).scalar_one() == len(PRODUCTS)
        assert {u.role for u in db.execute(select(UserModel)).scalars()} == {UserRole.SELLER, UserRole.BUYER}

        assert seed(db) is False
        assert db.execute(select(func.count()).select_from(UserModel)).scalar_one() == 2

"""
Test utilities and fixtures
"""

import html
import io
import re
import sys
from datetime import datetime
from pathlib import Path

import psycopg2
import pytest
from PIL import Image
from werkzeug.security import generate_password_hash

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import TestConfig
from web_app import create_app


DEFAULT_PASSWORD = "abc123"


class InMemoryDatabase:
    """Route-level stand-in for src.database.Database"""

    def __init__(self):
        self.users = {}
        self.items = {}
        self.orders = {}
        self.addresses = {}
        self._next_ids = {"users": 1, "items": 1, "orders": 1}

    def _next_id(self, table):
        value = self._next_ids[table]
        self._next_ids[table] += 1
        return value

    # users

    def create_user(self, nickname, email, password_hash):
        if self.get_user_by_email(email):
            raise psycopg2.IntegrityError("duplicate key value violates unique constraint")
        user_id = self._next_id("users")
        self.users[user_id] = {
            "id": user_id,
            "nickname": nickname,
            "email": email,
            "password_hash": password_hash,
            "last_login": None,
        }
        return user_id

    def get_user_by_email(self, email):
        for user in self.users.values():
            if user["email"].lower() == (email or "").lower():
                return dict(user)
        return None

    def get_user_by_id(self, user_id):
        user = self.users.get(user_id)
        return dict(user) if user else None

    def update_last_login(self, user_id):
        self.users[user_id]["last_login"] = datetime.now()

    # items

    def create_item(self, user_id, name, info, category_id, sales_status_id,
                    shipping_fee_status_id, prefecture_id, scheduled_delivery_id,
                    price, image):
        item_id = self._next_id("items")
        self.items[item_id] = {
            "id": item_id,
            "user_id": user_id,
            "name": name,
            "info": info,
            "category_id": category_id,
            "sales_status_id": sales_status_id,
            "shipping_fee_status_id": shipping_fee_status_id,
            "prefecture_id": prefecture_id,
            "scheduled_delivery_id": scheduled_delivery_id,
            "price": price,
            "image": image,
        }
        return item_id

    def _with_joins(self, item):
        row = dict(item)
        row["seller_nickname"] = self.users[item["user_id"]]["nickname"]
        row["sold"] = any(order["item_id"] == item["id"] for order in self.orders.values())
        return row

    def get_item(self, item_id):
        item = self.items.get(item_id)
        return self._with_joins(item) if item else None

    def get_items(self, limit=None):
        newest_first = sorted(self.items.values(), key=lambda item: item["id"], reverse=True)
        if limit is not None:
            newest_first = newest_first[:limit]
        return [self._with_joins(item) for item in newest_first]

    def count_items(self):
        return len(self.items)

    def update_item(self, item_id, **changes):
        item = self.items[item_id]
        for column, value in changes.items():
            if value is not None:
                item[column] = value

    def delete_item(self, item_id):
        del self.items[item_id]

    # orders

    def create_order(self, user_id, item_id, postal_code, prefecture_id, city,
                     addresses, phone_number, building=None):
        if self.get_order_for_item(item_id):
            raise psycopg2.IntegrityError("duplicate key value violates unique constraint")
        order_id = self._next_id("orders")
        self.orders[order_id] = {"id": order_id, "user_id": user_id, "item_id": item_id}
        self.addresses[order_id] = {
            "postal_code": postal_code,
            "prefecture_id": prefecture_id,
            "city": city,
            "addresses": addresses,
            "building": building,
            "phone_number": phone_number,
        }
        return order_id

    def get_order_for_item(self, item_id):
        for order in self.orders.values():
            if order["item_id"] == item_id:
                return {**order, **self.addresses[order["id"]]}
        return None


def png_bytes(color="red", size=(8, 8)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def image_upload(filename="sample.png", content=None):
    """Multipart file tuple for the Flask test client"""
    return (io.BytesIO(content if content is not None else png_bytes()), filename)


def item_form(**overrides):
    """Valid item[...] form fields; pass field=value to override"""
    fields = {
        "name": "テスト商品",
        "info": "テスト用の商品説明です",
        "category_id": "2",               # レディース
        "sales_status_id": "2",           # 新品、未使用
        "shipping_fee_status_id": "2",    # 着払い(購入者負担)
        "prefecture_id": "2",             # 北海道
        "scheduled_delivery_id": "2",     # 1~2日で発送
        "price": "3000",
    }
    fields.update(overrides)
    return {f"item[{name}]": value for name, value in fields.items()}


def page_text(response):
    return html.unescape(response.get_data(as_text=True))


def selected_value(page, field):
    """Value of the selected <option> in the item_<field> select box"""
    match = re.search(
        rf'<select[^>]*id="item_{field}".*?<option value="(\d+)" selected',
        page,
        re.S,
    )
    return match.group(1) if match else None


def input_value(page, element_id):
    match = re.search(rf'id="{element_id}"[^>]*value="([^"]*)"', page, re.S)
    return match.group(1) if match else None


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(db, upload_dir):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(upload_dir)

    return create_app(Config, database=db)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(db):
    """Create a member; returns its row"""
    counter = {"n": 0}

    def _make_user(nickname=None, email=None, password=DEFAULT_PASSWORD):
        counter["n"] += 1
        nickname = nickname or f"user{counter['n']}"
        email = email or f"user{counter['n']}@example.com"
        user_id = db.create_user(nickname, email, generate_password_hash(password))
        return db.get_user_by_id(user_id)

    return _make_user


@pytest.fixture
def make_item(db, make_user):
    """Create an item directly in the database; returns its row"""

    def _make_item(user=None, image="seed/sample.png", **overrides):
        user = user or make_user()
        fields = {
            "name": "出品済みの商品",
            "info": "説明文",
            "category_id": 3,
            "sales_status_id": 4,
            "shipping_fee_status_id": 3,
            "prefecture_id": 14,
            "scheduled_delivery_id": 3,
            "price": 4500,
        }
        fields.update(overrides)
        item_id = db.create_item(user_id=user["id"], image=image, **fields)
        return db.get_item(item_id)

    return _make_item


@pytest.fixture
def login(client):
    def _login(user, password=DEFAULT_PASSWORD, follow_redirects=True, next_url=None):
        path = "/users/sign_in" + (f"?next={next_url}" if next_url else "")
        return client.post(
            path,
            data={"user[email]": user["email"], "user[password]": password},
            follow_redirects=follow_redirects,
        )

    return _login

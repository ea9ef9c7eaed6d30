"""
Service-level tests that bypass HTTP: empty listings, the log read path
and direct calls with values the request schemas would already reject.
"""
import asyncio
import uuid

import pytest

from app.models.product import Product
from app.services import ConflictError, NotFoundError, ProductService, UserService, ValidationError
from app.services.product_service import DELETED_USER


pytestmark = pytest.mark.asyncio


async def test_list_users_empty(db):
    with pytest.raises(NotFoundError) as err:
        await UserService(db).list_users()
    assert err.value.message == "No users found"


async def test_list_products_empty(db):
    with pytest.raises(NotFoundError):
        await ProductService(db).list_products()


async def test_create_user_conflict_and_storage_state(db):
    service = UserService(db)
    assert await service.create_user("Alice", "secret1") == "New user Alice created"
    with pytest.raises(ConflictError) as err:
        await service.create_user("ALICE", "x")
    assert err.value.message == 'Username "ALICE" already exist'
    assert len(await service.list_users()) == 1


async def test_create_product_rejects_non_numeric_amount(db):
    service = ProductService(db)
    for amount in (None, "5", True):
        with pytest.raises(ValidationError):
            await service.create_product("Widget", "d", [], "u1", amount)
    with pytest.raises(ValidationError):
        await service.create_product("Widget", "d", ("a",), "u1", 1)


async def test_update_product_amount_needs_user(db):
    service = ProductService(db)
    await service.create_product("Widget", "d", [], "u1", 5)
    product = await Product.get(title="Widget")
    with pytest.raises(ValidationError):
        await service.update_product(str(product.id), "Widget", "d", [], True, user_id=None, amount=1)


async def test_log_grows_by_one_per_update(db):
    service = ProductService(db)
    await service.create_product("Widget", "d", [], "u1", 5)
    product = await Product.get(title="Widget")
    assert len(product.log) == 1

    for n in range(1, 4):
        await service.update_product(str(product.id), "Widget", "d", [], True, user_id="u1", amount=n)
        await product.refresh_from_db()
        assert len(product.log) == 1 + n
        assert product.log[-1]["amount"] == n
    assert product.log[0]["amount"] == 5


async def test_list_products_skips_malformed_log_entries(db):
    service = ProductService(db)
    await service.create_product("Widget", "d", [], "u1", 5)
    product = await Product.get(title="Widget")
    product.log = ["garbage", {"userId": "u1"}, *product.log]
    await product.save()

    listed = await service.list_products()
    assert len(listed[0]["log"]) == 1
    assert listed[0]["log"][0]["username"] == DELETED_USER

    # Storage keeps what it had
    await product.refresh_from_db()
    assert len(product.log) == 3


async def test_username_resolution_keeps_log_order(db, create_user, monkeypatch):
    first, _ = await create_user(username="first")
    second, _ = await create_user(username="second")
    service = ProductService(db)
    await service.create_product("Widget", "d", [], str(first.id), 1)
    product = await Product.get(title="Widget")
    await service.update_product(str(product.id), "Widget", "d", [], True, user_id=str(second.id), amount=2)
    await service.update_product(str(product.id), "Widget", "d", [], True, user_id=str(uuid.uuid4()), amount=3)

    original = ProductService._username_of

    async def slow_first(self, user_id):
        # Earlier entries finish last
        if user_id == str(first.id):
            await asyncio.sleep(0.05)
        return await original(self, user_id)

    monkeypatch.setattr(ProductService, "_username_of", slow_first)
    log = (await service.list_products())[0]["log"]
    assert [e["username"] for e in log] == ["first", "second", DELETED_USER]
    assert [e["amount"] for e in log] == [1, 2, 3]


async def _skip_precheck(*args, **kwargs):
    return None


async def test_user_unique_index_reports_conflict(db, monkeypatch):
    service = UserService(db)
    await service.create_user("Alice", "secret1")
    await service.create_user("Bob", "secret2")
    bob = next(u for u in await service.list_users() if u["username"] == "Bob")

    monkeypatch.setattr("app.services.user_service.ensure_unique", _skip_precheck)

    with pytest.raises(ConflictError) as err:
        await service.create_user("ALICE", "x")
    assert err.value.message == 'Username "ALICE" already exist'

    with pytest.raises(ConflictError) as err:
        await service.update_user(bob["id"], "alice", ["Employee"], True)
    assert err.value.message == 'Username "alice" already exist'


async def test_product_unique_index_reports_conflict(db, monkeypatch):
    service = ProductService(db)
    await service.create_product("Widget", "d", [], "u1", 5)
    await service.create_product("Gadget", "d", [], "u1", 1)
    gadget = await Product.get(title="Gadget")

    monkeypatch.setattr("app.services.product_service.ensure_unique", _skip_precheck)

    with pytest.raises(ConflictError) as err:
        await service.create_product("WIDGET", "d", [], "u1", 2)
    assert err.value.message == 'Title "WIDGET" already exist'

    with pytest.raises(ConflictError) as err:
        await service.update_product(str(gadget.id), "widget", "d", [], True)
    assert err.value.message == 'Title "widget" already exist'
    assert await Product.all().count() == 2


async def test_non_finite_amount_rejected_by_service(db):
    service = ProductService(db)
    for amount in (float("nan"), float("inf"), float("-inf")):
        with pytest.raises(ValidationError):
            await service.create_product("Widget", "d", [], "u1", amount)
    assert await Product.all().count() == 0

    await service.create_product("Widget", "d", [], "u1", 5)
    product = await Product.get(title="Widget")
    for amount in (float("nan"), float("inf")):
        with pytest.raises(ValidationError):
            await service.update_product(str(product.id), "Widget", "d", [], True, user_id="u1", amount=amount)
    await product.refresh_from_db()
    assert len(product.log) == 1

"""Unit tests for the in-memory unit of work."""

import pytest

from agora.domain.error import ConcurrencyConflictError, ItemNotFoundError
from agora.domain.value import VoteValue
from agora.persistence.repository.inmemory import (
    InMemoryStore,
    InMemoryUnitOfWorkFactory,
)
from tests.conftest import make_post, make_user


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seeded(store):
    owner, voter = make_user("owner"), make_user("voter")
    post = make_post(owner)
    store.users[owner.id] = owner
    store.users[voter.id] = voter
    store.items[post.ref] = post
    return owner, voter, post


class TestInMemoryUnitOfWork:
    """Staged writes become visible together on commit, or not at all."""

    @pytest.mark.asyncio
    async def test_commit_publishes_ledger_and_scores(self, store, seeded):
        owner, voter, post = seeded
        factory = InMemoryUnitOfWorkFactory(store)

        async with factory.create() as uow:
            item = await uow.items.find_by_ref(post.ref)
            await uow.items.update_ledger(item, item.ledger.upsert(voter.id, VoteValue.UP))
            await uow.users.apply_score_delta(owner.id, 10)

            # Not visible outside the unit of work yet
            assert store.items[post.ref].version == 0
            assert store.users[owner.id].score == 0
            # Visible inside it
            assert (await uow.users.find_by_id(owner.id)).score == 10
            assert (await uow.items.find_by_ref(post.ref)).version == 1

        assert store.items[post.ref].version == 1
        assert store.items[post.ref].aggregate_count == 1
        assert store.users[owner.id].score == 10

    @pytest.mark.asyncio
    async def test_exception_discards_everything(self, store, seeded):
        owner, voter, post = seeded
        factory = InMemoryUnitOfWorkFactory(store)

        with pytest.raises(RuntimeError):
            async with factory.create() as uow:
                item = await uow.items.find_by_ref(post.ref)
                await uow.items.update_ledger(
                    item, item.ledger.upsert(voter.id, VoteValue.DOWN)
                )
                await uow.users.apply_score_delta(owner.id, -2)
                raise RuntimeError("boom")

        assert store.items[post.ref] == post
        assert store.users[owner.id].score == 0

    @pytest.mark.asyncio
    async def test_second_writer_of_same_version_conflicts(self, store, seeded):
        owner, voter, post = seeded
        factory = InMemoryUnitOfWorkFactory(store)
        first, second = factory.create(), factory.create()
        await first.begin()
        await second.begin()

        for uow in (first, second):
            item = await uow.items.find_by_ref(post.ref)
            await uow.items.update_ledger(item, item.ledger.upsert(voter.id, VoteValue.UP))
            await uow.users.apply_score_delta(owner.id, 10)

        await first.commit()
        with pytest.raises(ConcurrencyConflictError):
            await second.commit()

        assert store.items[post.ref].version == 1
        assert store.users[owner.id].score == 10

    @pytest.mark.asyncio
    async def test_stale_read_is_rejected_at_write(self, store, seeded):
        _, voter, post = seeded
        factory = InMemoryUnitOfWorkFactory(store)
        stale = post

        async with factory.create() as uow:
            item = await uow.items.find_by_ref(post.ref)
            await uow.items.update_ledger(item, item.ledger.upsert(voter.id, VoteValue.UP))

        with pytest.raises(ConcurrencyConflictError):
            async with factory.create() as uow:
                await uow.items.update_ledger(stale, stale.ledger)

    @pytest.mark.asyncio
    async def test_deleted_item_is_not_found_at_commit(self, store, seeded):
        _, voter, post = seeded
        uow = InMemoryUnitOfWorkFactory(store).create()
        await uow.begin()
        item = await uow.items.find_by_ref(post.ref)
        await uow.items.update_ledger(item, item.ledger.upsert(voter.id, VoteValue.UP))

        del store.items[post.ref]

        with pytest.raises(ItemNotFoundError):
            await uow.commit()

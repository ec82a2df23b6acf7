"""End-to-end walkthroughs of subscribe, list and unsubscribe for user 1."""

from __future__ import annotations

import pytest

from flowerss.core import Core, SubscriptionExistError
from tests.support.fake_storage import FakeStorage


@pytest.mark.asyncio
async def test_subscribe_list_and_unsubscribe_lifecycle(
    core: Core, storage: FakeStorage
) -> None:
    storage.source.seed(101, 102)

    # Absent pair: subscribing succeeds and the row now exists.
    await core.add_subscription(1, 101)
    assert (1, 101) in storage.subscription.pairs()

    # Same pair again: business condition, nothing new is written.
    with pytest.raises(SubscriptionExistError):
        await core.add_subscription(1, 101)
    assert storage.subscription.pairs().count((1, 101)) == 1

    # Two subscriptions, one of which cannot be resolved.
    await core.add_subscription(1, 102)
    storage.source.broken[101] = RuntimeError("err")
    sources = await core.get_user_subscribed_sources(1)
    assert [source.id for source in sources] == [102]
    del storage.source.broken[101]

    # Last subscriber leaves: subscription, source and contents all go.
    storage.content.contents[101] = ["entry"]
    storage.log.calls.clear()
    await core.unsubscribe(1, 101)
    for name in (
        "subscription.delete_subscription",
        "subscription.count_source_subscriptions",
        "source.delete",
        "content.delete_source_contents",
    ):
        assert storage.log.count(name) == 1
    assert storage.subscription.pairs() == [(1, 102)]

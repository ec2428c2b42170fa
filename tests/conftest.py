import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize both domains once. Tests push the contexts they need; the
    ordering context is pushed for every test by ``_ordering_ctx``.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from notifications.domain import notifications
    from ordering.domain import ordering

    ordering.init()
    notifications.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from notifications.domain import notifications
    from ordering.domain import ordering
    from shared.db import drop_db, setup_db

    setup_db(ordering)
    setup_db(notifications)

    yield

    drop_db(notifications)
    drop_db(ordering)


def _reset_domain_data(domain):
    with domain.domain_context():
        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _ordering_ctx():
    """Push the ordering domain context, and clean both domains afterwards."""
    from notifications.domain import notifications
    from ordering.domain import ordering

    ctx = ordering.domain_context()
    ctx.push()

    yield ordering

    ctx.pop()
    _reset_domain_data(ordering)
    _reset_domain_data(notifications)


# ---------------------------------------------------------------------------
# Adapters: every port gets a fresh in-memory adapter per test
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def task_queue():
    from shared.background import reset_task_queue, set_task_queue
    from shared.background.fake_queue import DeferredTaskQueue

    queue = DeferredTaskQueue()
    set_task_queue(queue)
    yield queue
    reset_task_queue()


@pytest.fixture(autouse=True)
def ledger(tmp_path):
    from inventory.ledger import reset_ledger, set_ledger
    from inventory.ledger.sql_ledger import SqlStockLedger

    stock_ledger = SqlStockLedger(f"sqlite:///{tmp_path / 'ledger.db'}")
    stock_ledger.create_tables()
    set_ledger(stock_ledger)
    yield stock_ledger
    reset_ledger()
    stock_ledger.engine.dispose()


@pytest.fixture(autouse=True)
def catalogue():
    from ordering.catalogue import reset_catalogue, set_catalogue
    from ordering.catalogue.fake_catalogue import FakeCatalogue

    fake = FakeCatalogue()
    set_catalogue(fake)
    yield fake
    reset_catalogue()


@pytest.fixture(autouse=True)
def directory():
    from identity.directory import reset_directory, set_directory
    from identity.directory.fake_directory import FakeIdentityDirectory
    from notifications.notification.recipients import reset_recipient_resolver

    fake = FakeIdentityDirectory()
    set_directory(fake)
    yield fake
    reset_directory()
    reset_recipient_resolver()


@pytest.fixture(autouse=True)
def push_channel():
    from notifications.channel import reset_push_channel, set_push_channel
    from notifications.channel.fake_push import FakePushAdapter

    fake = FakePushAdapter()
    set_push_channel(fake)
    yield fake
    reset_push_channel()


@pytest.fixture(autouse=True)
def renderer():
    from ordering.invoice import reset_renderer, set_renderer
    from ordering.invoice.fake_renderer import FakePdfRenderer

    fake = FakePdfRenderer()
    set_renderer(fake)
    yield fake
    reset_renderer()


@pytest.fixture(autouse=True)
def realtime_bus():
    from ordering.realtime import reset_realtime_bus, set_realtime_bus
    from ordering.realtime.fake_bus import FakeRealtimeBus

    fake = FakeRealtimeBus()
    set_realtime_bus(fake)
    yield fake
    reset_realtime_bus()

from pymongo.errors import ServerSelectionTimeoutError

from event_backend.database import init_db
from event_backend.tests.fakes import FakeCollection


def test_ensure_indexes_creates_unique_email_index():
    db = {"users": FakeCollection(), "events": FakeCollection()}

    init_db.ensure_indexes(db)

    keys, options = db["users"].indexes[0]
    assert keys == [("email", 1)]
    assert options["unique"] is True
    assert db["events"].indexes[0][0] == [("category", 1)]


def test_main_reports_store_failure(mocker):
    db = mocker.MagicMock()
    db.__getitem__.return_value.create_index.side_effect = ServerSelectionTimeoutError("no servers")
    mocker.patch("event_backend.database.init_db.get_db", return_value=db)

    assert init_db.main() == 1


def test_main_success(mocker):
    db = {"users": FakeCollection(), "events": FakeCollection()}
    mocker.patch("event_backend.database.init_db.get_db", return_value=db)

    assert init_db.main() == 0

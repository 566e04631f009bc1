import pytest

from iso15118json.json_codec import JSONCodec
from iso15118json.settings import SettingKey, shared_settings


@pytest.fixture(autouse=True)
def restore_shared_settings():
    original = dict(shared_settings)
    yield
    shared_settings.clear()
    shared_settings.update(original)


@pytest.fixture
def codec():
    return JSONCodec()


@pytest.fixture
def lenient_codec():
    shared_settings[SettingKey.REJECT_UNKNOWN_FIELDS] = False
    return JSONCodec()

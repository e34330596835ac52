import pytest

from config import DatabaseSettings
from database import open_gateway
from library import Library
from utils.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # set_output_mode os.environ'a yazar; monkeypatch test sonunda geri alır
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def db_file(tmp_path, request):
    # Her test için benzersiz bir veritabanı dosyası oluştur
    return str(tmp_path / f"test_{request.node.name}.db")


@pytest.fixture
def gateway(db_file):
    gw = open_gateway(DatabaseSettings(db_file=db_file))
    yield gw
    gw.close()


@pytest.fixture
def lib(gateway):
    yield Library(gateway)

import pytest
from PIL import Image

from carte_visite.models import AppState, CardInfo, Stage


@pytest.fixture
def awa():
    return CardInfo(name="Awa Kone", position="Chargée de Projet", phone="61161818")


@pytest.fixture
def preview_state(awa):
    return AppState(stage=Stage.PREVIEW, card=awa)


@pytest.fixture
def logo_file(tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGBA", (40, 10), (255, 0, 0, 255)).save(path)
    return path


@pytest.fixture
def missing_logo(tmp_path):
    return tmp_path / "missing.png"

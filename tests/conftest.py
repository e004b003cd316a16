import pytest

from helpers import FakeClock, SleepRecorder, draw_logo
from src.media.logo_assets import LogoCatalog
from src.shared.config import AppConfig, ApiSettings


@pytest.fixture
def logo_dir(tmp_path):
    d = tmp_path / "logos"
    d.mkdir()
    draw_logo((232, 74, 39, 255)).save(d / "logo-full-color.png")
    draw_logo((0, 0, 0, 255)).save(d / "logo-monochrome.png")
    return d


@pytest.fixture
def catalog(logo_dir):
    return LogoCatalog(logo_dir, "logo-full-color.png", "logo-monochrome.png")


@pytest.fixture
def empty_catalog(tmp_path):
    return LogoCatalog(tmp_path / "nothing-here", "logo-full-color.png", "logo-monochrome.png")


@pytest.fixture
def app_config(logo_dir):
    return AppConfig.model_validate({"logo": {"assetDir": str(logo_dir)}})


@pytest.fixture
def api_settings():
    return ApiSettings(baseUrl="https://api.test/v1", maxRetries=2, retryDelaySeconds=0.5, timeoutSeconds=3)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return SleepRecorder()

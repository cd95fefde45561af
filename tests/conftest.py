import pytest

from funrec_server.schemas import Query, RawFeature
from funrec_server.settings import ServiceSettings, get_settings


def make_feature(name, coordinates, categories=None, formatted=None) -> RawFeature:
    properties = {"categories": categories or []}
    if name is not None:
        properties["name"] = name
    if formatted is not None:
        properties["formatted"] = formatted
    return RawFeature.model_validate({"properties": properties, "geometry": {"coordinates": coordinates}})


@pytest.fixture
def query() -> Query:
    return Query(locationName="Long Beach", latitude=33.77, longitude=-118.19)


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(geoapify_api_key="test-key", service_api_key="svc-key")


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

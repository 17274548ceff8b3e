import pytest

from lazywire import Injector, InjectorSettings


@pytest.fixture
def settings(tmp_path) -> InjectorSettings:
    return InjectorSettings(graph_name="test_graph", graph_path=str(tmp_path / "graph.dot"))


@pytest.fixture
def injector(settings) -> Injector:
    return Injector(settings=settings)

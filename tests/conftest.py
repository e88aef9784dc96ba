import pytest


@pytest.fixture
def create_script(tmp_path):
    """A factory fixture writing a .wi script into a temporary directory."""

    def _create_script(content: str, name: str = "example.wi"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _create_script

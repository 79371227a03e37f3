"""Unit tests for variables file loading."""

import pytest

from configguard.core.exceptions import ConfigurationError
from configguard.utils.loader import load_variables


@pytest.mark.unit
class TestLoadVariables:
    """Test reading variables trees from disk."""

    def test_json(self, tmp_path):
        path = tmp_path / "variables.json"
        path.write_text('{"database": {"host": "localhost", "port": 5432}}')

        assert load_variables(path) == {"database": {"host": "localhost", "port": 5432}}

    @pytest.mark.parametrize("name", ["variables.yaml", "variables.yml"])
    def test_yaml(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("services:\n  - name: web\n    replicas: 2\n")

        assert load_variables(path) == {"services": [{"name": "web", "replicas": 2}]}

    def test_toml(self, tmp_path):
        path = tmp_path / "variables.toml"
        path.write_text('[database]\nhost = "localhost"\nport = 5432\n')

        assert load_variables(path) == {"database": {"host": "localhost", "port": 5432}}

    @pytest.mark.parametrize("name", [".env", "production.env", ".env.local"])
    def test_dotenv(self, tmp_path, name):
        path = tmp_path / name
        path.write_text("API_KEY=abc\n# comment\nDEBUG=true\n")

        assert load_variables(path) == {"API_KEY": "abc", "DEBUG": "true"}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_variables(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_variables(tmp_path / "missing.json")

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "variables.ini"
        path.write_text("[section]\nkey = value\n")

        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_variables(path)

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "variables.json"
        path.write_text("{broken")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_variables(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "variables.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_variables(path)

"""Tests for configuration loading and logging helpers."""

import logging
from pathlib import Path

import pytest

from throwsim.utils import (
    ConfigLoader,
    LoggerMixin,
    get_logger,
    get_nested,
    load_config,
    log_function_call,
    set_nested,
    setup_logger,
)


@pytest.fixture
def config_dir(tmp_path):
    """Config directory with a main file that includes a render section."""
    (tmp_path / "render.yaml").write_text("scale: 0.5\ngrid: true\n")
    (tmp_path / "main.yaml").write_text(
        "scene:\n"
        "  preset: bedroom_side\n"
        "render: \"!include render.yaml\"\n"
    )
    return tmp_path


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_with_include(self, config_dir):
        config = ConfigLoader().load(config_dir / "main.yaml")

        assert config["scene"]["preset"] == "bedroom_side"
        assert config["render"] == {"scale": 0.5, "grid": True}

    def test_bare_name_resolved_in_config_dir(self, config_dir):
        loader = ConfigLoader(str(config_dir))

        assert loader.load("main.yaml")["render"]["scale"] == 0.5

    def test_missing_include(self, tmp_path):
        (tmp_path / "main.yaml").write_text("render: \"!include missing.yaml\"\n")

        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(tmp_path / "main.yaml")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path):
        (tmp_path / "scalar.yaml").write_text("42\n")

        with pytest.raises(ValueError):
            ConfigLoader().load(tmp_path / "scalar.yaml")

    def test_malformed_yaml(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("render: {scale: 0.5\n  grid: [\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            ConfigLoader().load(tmp_path / "broken.yaml")

    def test_malformed_include(self, tmp_path):
        (tmp_path / "render.yaml").write_text("scale: [0.5\n")
        (tmp_path / "main.yaml").write_text("render: \"!include render.yaml\"\n")

        with pytest.raises(ValueError, match="render.yaml"):
            ConfigLoader().load(tmp_path / "main.yaml")

    def test_empty_file_is_empty_config(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")

        assert ConfigLoader().load(tmp_path / "empty.yaml") == {}

    def test_cache_returns_private_copies(self, config_dir):
        """Mutating a loaded config does not leak into later loads."""
        loader = ConfigLoader()
        first = loader.load(config_dir / "main.yaml")
        first["render"]["scale"] = 99

        assert loader.load(config_dir / "main.yaml")["render"]["scale"] == 0.5

    def test_cache_and_clear(self, config_dir):
        loader = ConfigLoader()
        path = config_dir / "main.yaml"
        loader.load(path)
        path.write_text("scene:\n  preset: default\n")

        assert loader.load(path)["scene"]["preset"] == "bedroom_side"
        assert loader.load(path, use_cache=False)["scene"]["preset"] == "default"

        loader.clear_cache()
        assert loader.load(path)["scene"]["preset"] == "default"

    def test_merge(self):
        loader = ConfigLoader()
        base = {"render": {"scale": 0.2, "grid": True}, "output": {"dir": "a"}}
        override = {"render": {"scale": 0.5}, "logging": {"level": "DEBUG"}}

        merged = loader.merge(base, override)

        assert merged == {
            "render": {"scale": 0.5, "grid": True},
            "output": {"dir": "a"},
            "logging": {"level": "DEBUG"},
        }
        assert base["render"]["scale"] == 0.2

    def test_save_and_reload(self, tmp_path):
        loader = ConfigLoader()
        path = tmp_path / "out" / "saved.yaml"
        loader.save({"render": {"scale": 0.3}}, path)

        assert loader.load(path) == {"render": {"scale": 0.3}}

    def test_load_config_overrides(self, config_dir):
        config = load_config(config_dir / "main.yaml", overrides={"render": {"scale": 1.0}})

        assert config["render"] == {"scale": 1.0, "grid": True}

    def test_bundled_default_config(self):
        config = load_config(Path(__file__).parent.parent / "configs" / "default.yaml")

        assert get_nested(config, "scene.preset") == "default"
        assert get_nested(config, "render.scale") == 0.2


class TestNestedAccess:
    """Tests for dot-notation helpers."""

    def test_get_nested(self):
        config = {"render": {"scale": 0.2}}

        assert get_nested(config, "render.scale") == 0.2
        assert get_nested(config, "render.missing", "x") == "x"
        assert get_nested(config, "render.scale.deeper") is None

    def test_set_nested_creates_parents(self):
        config = {}
        set_nested(config, "output.dir", "outputs/run1")
        set_nested(config, "output.render", False)

        assert config == {"output": {"dir": "outputs/run1", "render": False}}


class TestLogging:
    """Tests for logger helpers."""

    def test_package_logger_has_handler(self):
        logger = get_logger("throwsim")

        assert logger.handlers

    def test_child_logger_propagates(self):
        """Module loggers rely on the package logger's handlers."""
        child = get_logger("throwsim.solver")

        assert child.name == "throwsim.solver"
        assert not child.handlers
        assert child.propagate
        assert logging.getLogger("throwsim").handlers

    def test_setup_logger_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger("throwsim.test_file", level="DEBUG", log_file=str(log_file), console=False)
        logger.debug("hello")

        for handler in logger.handlers:
            handler.flush()
            handler.close()

        assert "hello" in log_file.read_text()
        assert logger.level == logging.DEBUG

    def test_setup_logger_replaces_handlers(self):
        name = "throwsim.test_handlers"
        setup_logger(name)
        logger = setup_logger(name)

        assert len(logger.handlers) == 1

    def test_logger_mixin_name(self):
        class Renderer(LoggerMixin):
            pass

        assert Renderer().logger.name == "throwsim.Renderer"

    def test_log_function_call(self, caplog):
        logger = logging.getLogger("throwsim.test_calls")

        @log_function_call(logger)
        def add(a, b):
            """Add two numbers."""
            return a + b

        with caplog.at_level(logging.DEBUG, logger="throwsim.test_calls"):
            assert add(2, 3) == 5

        assert add.__name__ == "add"
        assert "Calling add" in caplog.text

    def test_log_function_call_reraises(self, caplog):
        logger = logging.getLogger("throwsim.test_errors")

        @log_function_call(logger)
        def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            fail()

        assert "fail failed: boom" in caplog.text

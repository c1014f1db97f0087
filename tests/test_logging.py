"""Tests for fileroutes._logging — verbose diagnostics switch."""

import logging
from pathlib import Path

import pytest

from fileroutes._logging import configure_logging
from fileroutes.codegen.generator import generate
from fileroutes.config import RoutesConfig
from fileroutes.routes.loader import register_routes

from .conftest import RecordingApp

pytestmark = pytest.mark.usefixtures("restore_logging")


class TestConfigureLogging:

    def test_quiet_suppresses_everything(self) -> None:
        logger = configure_logging(False)
        assert not logger.isEnabledFor(logging.CRITICAL)

    def test_verbose_enables_debug(self) -> None:
        logger = configure_logging(True)
        assert logging.getLogger("fileroutes.codegen").isEnabledFor(logging.DEBUG)
        assert any(h.get_name() == "fileroutes-stderr" for h in logger.handlers)

    def test_handler_installed_once(self) -> None:
        configure_logging(True)
        configure_logging(True)
        logger = logging.getLogger("fileroutes")
        assert sum(h.get_name() == "fileroutes-stderr" for h in logger.handlers) == 1

    def test_package_logger_not_root(self) -> None:
        root_level = logging.getLogger().level
        logger = configure_logging(False)
        assert logger.name == "fileroutes"
        assert logging.getLogger().level == root_level

    def test_verbose_output_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(True)
        logging.getLogger("fileroutes.scanner").info("scanning")
        assert "[fileroutes] INFO scanning" in capsys.readouterr().err


class TestLibraryEntryPoints:
    """generate() and register_routes() never silence host logging."""

    def test_quiet_generate_leaves_level_alone(self, tmp_path: Path, restore_logging: logging.Logger) -> None:
        restore_logging.setLevel(logging.INFO)
        generate(RoutesConfig(root=tmp_path, write=False))
        assert restore_logging.level == logging.INFO
        assert restore_logging.isEnabledFor(logging.INFO)

    def test_verbose_generate_enables_debug(self, tmp_path: Path, restore_logging: logging.Logger) -> None:
        generate(RoutesConfig(root=tmp_path, write=False, verbose=True))
        assert restore_logging.isEnabledFor(logging.DEBUG)

    def test_register_routes_verbose(
        self, tmp_path: Path, restore_logging: logging.Logger, capsys: pytest.CaptureFixture[str]
    ) -> None:
        register_routes(RecordingApp(), tmp_path / "missing", verbose=True)
        assert any(h.get_name() == "fileroutes-stderr" for h in restore_logging.handlers)
        assert "[fileroutes] DEBUG" in capsys.readouterr().err

    def test_register_routes_quiet_by_default(self, tmp_path: Path, restore_logging: logging.Logger) -> None:
        restore_logging.setLevel(logging.WARNING)
        register_routes(RecordingApp(), tmp_path / "missing")
        assert restore_logging.level == logging.WARNING
        assert not any(h.get_name() == "fileroutes-stderr" for h in restore_logging.handlers)

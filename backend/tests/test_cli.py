"""
test_cli.py — Tests for the glasify-seed command line entry point.

main() drives its own event loop (asyncio.run), so these tests are plain
synchronous functions.  Full runs seed a throwaway SQLite file under tmp_path.
"""

import json
import logging

import pytest

from glasify.cli import build_parser, main
from glasify.services.logging_config import JSONFormatter, SeedLogger


@pytest.fixture
def seed_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'seed.db'}")
    monkeypatch.setenv("TENANT_BUSINESS_NAME", "Vidrios La Equidad")
    monkeypatch.delenv("SEED_BATCH_SIZE", raising=False)
    return tmp_path


# ===========================================================================
# Class 1: Argument handling
# ===========================================================================

class TestArguments:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.preset == "minimal"
        assert args.verbose is False
        assert args.continue_on_error is False
        assert args.batch_size is None

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "--preset" in capsys.readouterr().out

    def test_unknown_preset(self, capsys):
        assert main(["--preset=nope"]) == 1
        err = capsys.readouterr().err
        assert "Unknown preset: nope" in err
        assert "Available presets: minimal, demo-client, full-catalog" in err

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("TENANT_BUSINESS_NAME", "Vidrios La Equidad")
        assert main(["--preset=minimal"]) == 1

    def test_missing_business_name(self, seed_env, monkeypatch):
        monkeypatch.delenv("TENANT_BUSINESS_NAME", raising=False)
        assert main([]) == 1

    def test_non_positive_batch_size(self, seed_env):
        assert main(["--batch-size=0"]) == 1


# ===========================================================================
# Class 2: Validate-only mode
# ===========================================================================

class TestValidateOnly:

    def test_needs_no_database(self, monkeypatch, capsys):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert main(["--preset=demo-client", "--validate-only"]) == 0
        assert "Preset 'demo-client'" in capsys.readouterr().out

    def test_strict_passes_clean_presets(self, capsys):
        assert main(["--preset=full-catalog", "--validate-only", "--strict"]) == 0
        assert main(["--preset=minimal", "--validate-only", "--strict"]) == 0
        out = capsys.readouterr().out
        assert "ERROR" not in out
        assert "success" in out


# ===========================================================================
# Class 3: Full runs
# ===========================================================================

class TestSeedRun:

    def test_minimal_run_succeeds(self, seed_env):
        assert main(["--preset=minimal"]) == 0
        assert (seed_env / "seed.db").exists()

    def test_rerun_is_idempotent(self, seed_env):
        assert main(["--preset=minimal"]) == 0
        assert main(["--preset=minimal", "--batch-size=1"]) == 0

    def test_no_clean_rerun(self, seed_env):
        assert main(["--preset=demo-client"]) == 0
        assert main(["--preset=demo-client", "--no-clean", "--json-logs"]) == 0


# ===========================================================================
# Class 4: Logging
# ===========================================================================

class TestLogging:

    def test_json_formatter_includes_stage(self):
        record = logging.LogRecord("glasify-orchestrator", logging.INFO, __file__, 1, "── %s ──", ("Models",), None)
        record.stage = "Models"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "── Models ──"
        assert entry["stage"] == "Models"
        assert entry["level"] == "INFO"

    def test_verbose_promotes_debug(self, caplog):
        caplog.set_level(logging.INFO, logger="glasify-orchestrator")
        SeedLogger(verbose=False).debug("hidden %d", 1)
        SeedLogger(verbose=True).debug("shown %d", 2)
        messages = [r.getMessage() for r in caplog.records]
        assert "shown 2" in messages
        assert "hidden 1" not in messages

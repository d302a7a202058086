"""
CLI Command Integration Tests.

Tests for the load command including:
- Argument parsing and usage errors
- Batch loading into a fresh embedded store
- Fatal load errors stopping the batch
- Recoverable per-file failures
- Configuration file handling
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from owl2graph.cli import LoadCommand, create_argument_parser, resolve_config
from owl2graph.cli import helpers
from owl2graph.constants import ExitCode
from owl2graph.main import main
from owl2graph.models import MappingState, NodeCategory
from owl2graph.store import EmbeddedGraphStore, GraphStoreError
from fixtures import (
    DISCIPLINES_KEYS,
    EQUIVALENCE_TTL,
    DISCIPLINES_TTL,
    MALFORMED_TTL,
    SPECIES_OWL,
    UNSATISFIABLE_TTL,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Remove handlers installed by setup_logging after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    helpers.reset_logging()
    root.setLevel(level)


def parse(*argv):
    return create_argument_parser().parse_args(list(argv))


@pytest.mark.unit
class TestArgumentParser:
    """Argument parsing."""

    def test_missing_ontology_path_exits_with_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == ExitCode.ERROR
        assert "--ontology-path" in capsys.readouterr().err

    def test_unknown_reasoner_exits_with_error(self):
        with pytest.raises(SystemExit) as exc_info:
            parse("-o", "a.owl", "--reasoner", "hermit")

        assert exc_info.value.code == 1

    def test_repeated_ontology_paths_keep_order(self):
        args = parse("-o", "b.owl", "--ontology-path", "a.owl")

        assert args.ontology_paths == ["b.owl", "a.owl"]

    def test_optional_arguments_default_to_none(self):
        args = parse("-o", "a.owl")

        assert args.db_path is None
        assert args.reasoner is None
        assert args.store_backend is None

    def test_log_level_case_insensitive(self):
        assert parse("-o", "a.owl", "--log-level", "debug").log_level == "DEBUG"


@pytest.mark.unit
class TestResolveConfig:
    """Configuration file plus command line overrides."""

    def test_command_line_overrides_file(self, temp_config_file):
        args = parse(
            "-o", "a.owl", "-c", temp_config_file,
            "-d", "other.db", "--reasoner", "owlrl", "--neo4j-uri", "bolt://override:7687",
            "--log-level", "WARNING",
        )

        config = resolve_config(args)

        assert config.db_path == "other.db"
        assert config.reasoner == "owlrl"
        assert config.neo4j.uri == "bolt://override:7687"
        assert config.neo4j.username == "loader"
        assert config.logging_settings["level"] == "WARNING"
        assert config.logging_settings["format"] == "json"

    def test_file_values_kept_without_overrides(self, temp_config_file):
        config = resolve_config(parse("-o", "a.owl", "-c", temp_config_file))

        assert config.db_path == "var/test-graph.db"
        assert config.reasoner == "structural"
        assert config.show_progress is True

    def test_no_progress_flag(self):
        assert resolve_config(parse("-o", "a.owl", "--no-progress")).show_progress is False


@pytest.mark.integration
class TestLoadCommand:
    """End-to-end runs against an embedded store on disk."""

    def test_success_exit_code_and_graph_file(self, write_ontology, db_path):
        path = write_ontology("fairsharing-disciplines.ttl", DISCIPLINES_TTL)

        exit_code = main(["-o", path, "-d", db_path, "--no-progress"])

        assert exit_code == ExitCode.SUCCESS
        store = EmbeddedGraphStore.open(db_path)
        assert store.keys() == sorted(DISCIPLINES_KEYS + ["owl:Thing"])
        assert store.node_labels("Genetics") == ["DISCIPLINE"]

    def test_paths_are_trimmed(self, write_ontology, db_path):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)

        exit_code = main(["-o", f"  {path}  ", "-d", db_path, "--no-progress"])

        assert exit_code == ExitCode.SUCCESS

    def test_rdf_xml_owl_file(self, write_ontology, db_path):
        path = write_ontology("ncbitaxon-sample.owl", SPECIES_OWL)

        assert main(["-o", path, "-d", db_path, "--no-progress", "-r", "structural"]) == ExitCode.SUCCESS

        store = EmbeddedGraphStore.open(db_path)
        assert store.outgoing("Dog") == [("partOf", "Mammal")]
        assert store.node_labels("Dog") == [NodeCategory.SPECIES.value]

    def test_malformed_file_is_fatal_and_stops_batch(self, write_ontology, db_path):
        good = write_ontology("fairsharing-disciplines.ttl", DISCIPLINES_TTL)
        bad = write_ontology("broken.ttl", MALFORMED_TTL)
        later = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        command = LoadCommand()

        exit_code = command.execute(parse("-o", good, "-o", bad, "-o", later, "-d", db_path, "--no-progress"))

        assert exit_code == ExitCode.ERROR
        assert len(command.results) == 1
        store = EmbeddedGraphStore.open(db_path)
        assert "Genetics" in store.keys()
        assert "Animal" not in store.keys()

    def test_missing_file_is_fatal(self, tmp_path, db_path):
        exit_code = main(["-o", str(tmp_path / "absent.owl"), "-d", db_path, "--no-progress"])

        assert exit_code == ExitCode.ERROR

    def test_inconsistent_file_is_skipped_and_run_succeeds(self, write_ontology, db_path):
        inconsistent = write_ontology("unsat.ttl", UNSATISFIABLE_TTL)
        good = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        command = LoadCommand()

        exit_code = command.execute(parse("-o", inconsistent, "-o", good, "-d", db_path, "--no-progress"))

        assert exit_code == ExitCode.SUCCESS
        assert [r.state for r in command.results] == [MappingState.ABORTED, MappingState.COMMITTED]
        assert command.results[0].inconsistent
        assert "Cat" not in EmbeddedGraphStore.open(db_path).keys()

    def test_store_is_wiped_before_run(self, write_ontology, db_path):
        first = write_ontology("fairsharing-disciplines.ttl", DISCIPLINES_TTL)
        second = write_ontology("plain.ttl", EQUIVALENCE_TTL)

        main(["-o", first, "-d", db_path, "--no-progress"])
        main(["-o", second, "-d", db_path, "--no-progress"])

        keys = EmbeddedGraphStore.open(db_path).keys()
        assert "Genetics" not in keys
        assert "Animal" in keys

    def test_fresh_runs_are_deterministic(self, write_ontology, tmp_path):
        paths = [
            write_ontology("fairsharing-disciplines.ttl", DISCIPLINES_TTL),
            write_ontology("plain.ttl", EQUIVALENCE_TTL),
        ]
        argv = [arg for p in paths for arg in ("-o", p)]
        snapshots = []
        for run in ("one.db", "two.db"):
            db = str(tmp_path / run)
            assert main(argv + ["-d", db, "--no-progress"]) == ExitCode.SUCCESS
            store = EmbeddedGraphStore.open(db)
            snapshots.append((store.node_count(), sorted(store.relationships())))

        assert snapshots[0] == snapshots[1]

    def test_injected_store_factory(self, write_ontology):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        store = EmbeddedGraphStore()
        command = LoadCommand(store_factory=lambda config: store)

        assert command.execute(parse("-o", path, "--no-progress")) == ExitCode.SUCCESS
        assert store.outgoing("Animal") == [("partOf", "LivingThing")]

    def test_invalid_config_exits_before_store_is_touched(self, tmp_path, write_ontology):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"reasoner": "hermit"}))
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        opened = []
        command = LoadCommand(store_factory=lambda config: opened.append(config))

        exit_code = command.execute(parse("-o", path, "-c", str(config_path)))

        assert exit_code == ExitCode.ERROR
        assert opened == []

    def test_unusable_db_path_is_fatal(self, write_ontology, tmp_path, caplog):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        occupied = tmp_path / "graph.db"
        occupied.write_text("not a directory")

        with caplog.at_level(logging.ERROR):
            exit_code = main(["-o", path, "-d", str(occupied), "--no-progress"])

        assert exit_code == ExitCode.ERROR
        assert any(r.getMessage().startswith("Fatal: Cannot recreate") for r in caplog.records)
        assert occupied.read_text() == "not a directory"

    def test_store_factory_failure_reported_without_mapping(self, write_ontology):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)

        def unreachable(config):
            raise GraphStoreError("Cannot connect to Neo4j at bolt://nowhere:7687")

        command = LoadCommand(store_factory=unreachable)

        assert command.execute(parse("-o", path, "--no-progress")) == ExitCode.ERROR
        assert command.results == []

    def test_report_printed(self, write_ontology, db_path, capsys):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)

        main(["-o", path, "-d", db_path, "--no-progress"])

        out = capsys.readouterr().out
        assert "Load Report" in out
        assert "Files committed: 1/1" in out
        assert "Exiting with success..." in out

    def test_log_file_written(self, write_ontology, db_path, tmp_path):
        path = write_ontology("plain.ttl", EQUIVALENCE_TTL)
        log_file = tmp_path / "logs" / "loader.log"

        main(["-o", path, "-d", db_path, "--no-progress", "--log-file", str(log_file)])

        assert "Exiting with success..." in log_file.read_text(encoding='utf-8')


@pytest.mark.unit
class TestLogSettings:
    """The logging config section with defaults applied."""

    def test_defaults(self):
        settings = helpers.LogSettings.from_dict(None)

        assert settings.level == logging.INFO
        assert settings.file is None
        assert not settings.structured
        assert settings.rotate
        assert settings.max_bytes == 10 * 1024 * 1024
        assert settings.backup_count == 5

    def test_full_section(self):
        settings = helpers.LogSettings.from_dict({
            "level": "debug",
            "file": "logs/run.log",
            "format": "JSON",
            "rotation": {"enabled": False, "max_mb": 2, "backup_count": 3},
        })

        assert settings.level == logging.DEBUG
        assert settings.file == "logs/run.log"
        assert settings.structured
        assert not settings.rotate
        assert settings.max_bytes == 2 * 1024 * 1024
        assert settings.backup_count == 3

    def test_invalid_values_fall_back(self):
        settings = helpers.LogSettings.from_dict({
            "level": "chatty",
            "format": "yaml",
            "rotation": {"max_mb": 0, "backup_count": "many"},
        })

        assert settings.level == logging.INFO
        assert not settings.structured
        assert settings.max_bytes == 10 * 1024 * 1024
        assert settings.backup_count == 5

    def test_non_mapping_rotation_ignored(self):
        assert helpers.LogSettings.from_dict({"rotation": True}).rotate


@pytest.mark.unit
class TestLoggingSetup:
    """Root handler installation."""

    def test_json_formatter(self):
        record = logging.LogRecord("owl2graph.test", logging.INFO, __file__, 7, "hello %s", ("world",), None)

        payload = json.loads(helpers.JSONFormatter().format(record))

        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "owl2graph.test"
        assert payload["source"].endswith(":7")
        assert "exception" not in payload

    def test_json_formatter_includes_traceback(self):
        try:
            raise ValueError("bad triple")
        except ValueError:
            record = logging.LogRecord(
                "owl2graph.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        payload = json.loads(helpers.JSONFormatter().format(record))

        assert "ValueError: bad triple" in payload["exception"]

    def test_setup_logging_returns_file(self, tmp_path):
        log_file = tmp_path / "run.log"

        actual = helpers.setup_logging(level="DEBUG", log_file=str(log_file))

        assert actual == str(log_file)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_console_only(self):
        assert helpers.setup_logging(config={"level": "WARNING"}) is None
        assert logging.getLogger().level == logging.WARNING

    def test_arguments_override_config(self, tmp_path):
        log_file = tmp_path / "override.log"

        actual = helpers.setup_logging(
            level="ERROR", log_file=str(log_file), config={"level": "DEBUG", "file": "ignored.log"}
        )

        assert actual == str(log_file)
        assert logging.getLogger().level == logging.ERROR

    def test_rotation_selects_handler_type(self, tmp_path):
        helpers.setup_logging(log_file=str(tmp_path / "rotating.log"))
        assert any(isinstance(h, RotatingFileHandler) for h in helpers._installed)

        helpers.setup_logging(config={"file": str(tmp_path / "plain.log"), "rotation": {"enabled": False}})
        file_handlers = [h for h in helpers._installed if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert not isinstance(file_handlers[0], RotatingFileHandler)

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        root = logging.getLogger()
        before = len(root.handlers)

        helpers.setup_logging(log_file=str(tmp_path / "first.log"))
        helpers.setup_logging(log_file=str(tmp_path / "second.log"))

        assert len(root.handlers) == before + 2
        helpers.reset_logging()
        assert len(root.handlers) == before

    def test_unwritable_location_falls_back_to_temp_dir(self, tmp_path, monkeypatch, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        fallback_dir = tmp_path / "fallback"
        monkeypatch.setattr(helpers.tempfile, "gettempdir", lambda: str(fallback_dir))

        actual = helpers.setup_logging(log_file=str(blocker / "run.log"))

        assert actual == str(fallback_dir / "run.log")
        assert "Using fallback log file" in capsys.readouterr().out

    def test_json_lines_written_to_file(self, tmp_path):
        log_file = tmp_path / "structured.log"
        helpers.setup_logging(config={"file": str(log_file), "format": "json"})

        logging.getLogger("owl2graph.test").warning("Nothing committed for plain.ttl")
        helpers.reset_logging()

        lines = [json.loads(line) for line in log_file.read_text(encoding='utf-8').splitlines()]
        assert lines[-1]["message"] == "Nothing committed for plain.ttl"
        assert lines[-1]["level"] == "WARNING"
